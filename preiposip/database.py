"""Async engine and session factory shared by the seeders, the CLI and Alembic."""

import ssl as _ssl
from typing import Any
from urllib.parse import parse_qs, urlencode, urlsplit, urlunsplit

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from preiposip.config import settings

_SSL_MODES = ("require", "verify-ca", "verify-full")


def asyncpg_url(url: str) -> tuple[str, dict[str, Any]]:
    """Return *url* with the asyncpg driver and the ``connect_args`` it needs.

    ``postgresql://`` and ``postgres://`` URLs get the ``+asyncpg`` qualifier
    so one ``DATABASE_URL`` serves both ``psql`` and the seeders. asyncpg
    rejects ``sslmode`` in the query string, so it is removed and turned into
    an ``ssl`` context when the mode asks for encryption.
    """
    for prefix in ("postgresql://", "postgres://"):
        if url.startswith(prefix):
            url = "postgresql+asyncpg://" + url[len(prefix) :]
            break

    parts = urlsplit(url)
    query = parse_qs(parts.query)
    connect_args: dict[str, Any] = {}
    mode = query.pop("sslmode", [None])[0]
    if mode is None:
        return url, connect_args

    if mode in _SSL_MODES:
        connect_args["ssl"] = _ssl.create_default_context()
    return urlunsplit(parts._replace(query=urlencode(query, doseq=True))), connect_args


def create_engine(url: str, **kwargs: Any) -> AsyncEngine:
    """Create an async engine for *url*; extra keyword arguments go to SQLAlchemy."""
    url, connect_args = asyncpg_url(url)
    return create_async_engine(url, connect_args=connect_args, **kwargs)


engine = create_engine(
    settings.database_url,
    pool_pre_ping=True,
    pool_size=5,
    max_overflow=10,
)

AsyncSessionLocal: async_sessionmaker[AsyncSession] = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)
