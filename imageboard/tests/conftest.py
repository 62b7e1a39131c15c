import io
import os
import sys
import tempfile
from pathlib import Path

import pytest
import pytest_asyncio
from PIL import Image

# Configure test environment before the engine is created on import
TEST_DIR = tempfile.mkdtemp(prefix='imageboard-test-')
os.environ['DATABASE_URL'] = f'sqlite+aiosqlite:///{TEST_DIR}/test.db'
os.environ.setdefault('MEDIA_DIR', os.path.join(TEST_DIR, 'media'))

# Ensure the package root is on sys.path when pytest changes CWD to this tests dir
HERE = Path(__file__).resolve()
PKG_ROOT = HERE.parents[2]
if str(PKG_ROOT) not in sys.path:
    sys.path.insert(0, str(PKG_ROOT))

from httpx import ASGITransport, AsyncClient  # noqa: E402

from imageboard.file_storage import FileStorage, get_storage  # noqa: E402
from imageboard.main import app  # noqa: E402
from imageboard.models import Base, engine  # noqa: E402


def make_image(fmt: str = 'PNG', size=(64, 64), color=(200, 30, 30)) -> bytes:
    buf = io.BytesIO()
    mode = 'P' if fmt == 'GIF' else 'RGB'
    Image.new('RGB', size, color).convert(mode).save(buf, format=fmt)
    return buf.getvalue()


def make_noise_jpeg(size=(128, 128)) -> bytes:
    buf = io.BytesIO()
    Image.frombytes('RGB', size, os.urandom(size[0] * size[1] * 3)).save(buf, format='JPEG', quality=95)
    return buf.getvalue()


@pytest.fixture
def png_bytes() -> bytes:
    return make_image('PNG')


@pytest.fixture
def storage(tmp_path) -> FileStorage:
    store = FileStorage(str(tmp_path / 'media'))
    app.dependency_overrides[get_storage] = lambda: store
    yield store
    app.dependency_overrides.pop(get_storage, None)


@pytest_asyncio.fixture
async def db():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    # connections belong to this test's event loop
    await engine.dispose()


@pytest_asyncio.fixture
async def client(db, storage):
    async with AsyncClient(transport=ASGITransport(app=app), base_url='http://test') as ac:
        yield ac
