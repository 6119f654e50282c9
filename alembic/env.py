import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection

from alembic import context

# Importing the package registers every table on Base.metadata.
import preiposip.models  # noqa: F401
from preiposip.config import settings
from preiposip.database import asyncpg_url, create_engine
from preiposip.models.base import Base

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def migration_url() -> str:
    """Prefer DATABASE_URL_DIRECT: a transaction-mode pooler cannot run DDL."""
    return settings.database_url_direct or settings.database_url


def run_migrations_offline() -> None:
    """Write the migration SQL to stdout without connecting."""
    url, _ = asyncpg_url(migration_url())
    context.configure(
        url=url.replace("postgresql+asyncpg://", "postgresql://", 1),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def _run_with_connection(connection: Connection) -> None:
    context.configure(connection=connection, target_metadata=target_metadata)
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    connectable = create_engine(migration_url(), poolclass=pool.NullPool)
    try:
        async with connectable.connect() as connection:
            await connection.run_sync(_run_with_connection)
    finally:
        await connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
