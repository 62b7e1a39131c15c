import os
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import declarative_base, sessionmaker

# plain driver URLs are mapped onto their asyncio drivers
ASYNC_DRIVERS = {
    'postgresql://': 'postgresql+asyncpg://',
    'sqlite://': 'sqlite+aiosqlite://',
}


def async_url(url: str) -> str:
    for plain, driver in ASYNC_DRIVERS.items():
        if url.startswith(plain):
            return driver + url[len(plain):]
    return url


# SQLite next to the working dir unless a database is configured
DATABASE_URL = async_url(os.getenv('DATABASE_URL') or 'sqlite:///./board.db')

engine = create_async_engine(DATABASE_URL, future=True, echo=False)
AsyncSessionLocal = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
Base = declarative_base()

# Import models so Base.metadata knows both tables
from .boards import Board  # noqa: F401,E402
from .comments import Comment  # noqa: F401,E402
