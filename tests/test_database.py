import ssl

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from preiposip.database import AsyncSessionLocal, asyncpg_url, create_engine, engine


def test_engine_is_async_engine():
    assert isinstance(engine, AsyncEngine)


def test_engine_has_pool_settings():
    pool = engine.pool
    assert pool.size() == 5  # type: ignore[attr-defined]


def test_async_session_factory_is_sessionmaker():
    assert isinstance(AsyncSessionLocal, async_sessionmaker)


@pytest.mark.parametrize(
    "raw",
    ["postgresql://u:p@db:5432/app", "postgres://u:p@db:5432/app"],
)
def test_asyncpg_url_adds_driver(raw):
    url, connect_args = asyncpg_url(raw)
    assert url == "postgresql+asyncpg://u:p@db:5432/app"
    assert connect_args == {}


def test_asyncpg_url_keeps_explicit_driver():
    url, _ = asyncpg_url("postgresql+asyncpg://u:p@db/app")
    assert url == "postgresql+asyncpg://u:p@db/app"


def test_asyncpg_url_moves_sslmode_into_connect_args():
    url, connect_args = asyncpg_url("postgresql://u:p@db/app?sslmode=require&application_name=x")
    assert "sslmode" not in url
    assert "application_name=x" in url
    assert isinstance(connect_args["ssl"], ssl.SSLContext)


def test_asyncpg_url_drops_sslmode_disable_without_ssl_context():
    url, connect_args = asyncpg_url("postgresql://u:p@db/app?sslmode=disable")
    assert url == "postgresql+asyncpg://u:p@db/app"
    assert "ssl" not in connect_args


@pytest.mark.asyncio
async def test_create_engine_passes_pool_options():
    custom = create_engine("postgresql://u:p@db/app?sslmode=disable", pool_size=2)
    try:
        assert custom.url.drivername == "postgresql+asyncpg"
        assert custom.pool.size() == 2  # type: ignore[attr-defined]
    finally:
        await custom.dispose()
