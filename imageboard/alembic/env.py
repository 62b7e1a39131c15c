import asyncio
from alembic import context
from sqlalchemy import pool
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from imageboard.models import Base, DATABASE_URL, async_url

config = context.config

# boards and comments, used by autogenerate
target_metadata = Base.metadata


def migration_url() -> str:
    # an explicit sqlalchemy.url from the ini file wins over the app's DATABASE_URL
    return async_url(config.get_main_option('sqlalchemy.url') or DATABASE_URL)


def run_migrations_offline():
    """Render the migrations as SQL for the configured dialect, no connection needed."""
    context.configure(
        url=migration_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={'paramstyle': 'named'},
    )
    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection):
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        # SQLite can only alter tables by copying them
        render_as_batch=connection.dialect.name == 'sqlite',
    )
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online():
    connectable: AsyncEngine = create_async_engine(migration_url(), poolclass=pool.NullPool)
    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)
    await connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
