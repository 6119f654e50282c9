"""Shared pytest fixtures for the PreIPOsip seeder test suite.

The module-level environment setup runs at collection time, before any
``preiposip.*`` module is imported, so pydantic-settings picks up the test
database URL rather than whatever ``.env`` holds.

Most tests are pure or use ``AsyncMock`` sessions. Tests marked
``integration`` need a PostgreSQL server and only run when
``PREIPOSIP_DB_TESTS=1``.

Fixture scopes
--------------
* ``test_db``           session: create ``preiposip_test``, run migrations, drop.
* ``session_factory``   function: sessionmaker bound to the test database.
* ``mock_session``      function: ``AsyncMock`` standing in for ``AsyncSession``.
"""

import asyncio
import os
import subprocess
from collections.abc import AsyncGenerator, Generator
from unittest.mock import AsyncMock, MagicMock

import asyncpg
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

# ---------------------------------------------------------------------------
# Test database configuration
# ---------------------------------------------------------------------------

_TEST_DB_NAME = "preiposip_test"
_DB_HOST = os.getenv("DB_HOST", "localhost")
_DB_PORT = os.getenv("DB_PORT", "5432")
_DB_USER = os.getenv("DB_USER", "postgres")
_DB_PASSWORD = os.getenv("DB_PASSWORD", "postgres")
# Connect to this existing DB to run CREATE / DROP DATABASE statements.
_DB_ADMIN_DB = os.getenv("DB_ADMIN_DB", "postgres")

_TEST_DB_URL = (
    f"postgresql+asyncpg://{_DB_USER}:{_DB_PASSWORD}@{_DB_HOST}:{_DB_PORT}/{_TEST_DB_NAME}"
)
_TEST_ADMIN_CONN_URL = (
    f"postgresql://{_DB_USER}:{_DB_PASSWORD}@{_DB_HOST}:{_DB_PORT}/{_DB_ADMIN_DB}"
)

DB_TESTS_ENABLED = os.getenv("PREIPOSIP_DB_TESTS") == "1"

# ---------------------------------------------------------------------------
# Environment bootstrap, must run before any ``preiposip.*`` import
# ---------------------------------------------------------------------------

# Override (not setdefault) so tests never hit a developer database.
os.environ["DATABASE_URL"] = _TEST_DB_URL
# Keep password hashing fast; the cost factor is irrelevant to the tests.
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["APP_ENV"] = "testing"


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    if DB_TESTS_ENABLED:
        return
    skip = pytest.mark.skip(reason="set PREIPOSIP_DB_TESTS=1 to run database tests")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip)


# ---------------------------------------------------------------------------
# Session doubles
# ---------------------------------------------------------------------------


def result_returning(value: object) -> MagicMock:
    """Return a fake ``Result`` whose ``scalar_one_or_none()`` yields *value*."""
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    result.scalar_one.return_value = value
    return result


@pytest.fixture
def mock_session() -> AsyncMock:
    """``AsyncSession`` double: every lookup misses unless a test says otherwise."""
    session = AsyncMock(spec=AsyncSession)
    session.add = MagicMock()
    session.execute.return_value = result_returning(None)
    return session


@pytest.fixture
def result_of():
    """Factory for fake ``Result`` objects, see :func:`result_returning`."""
    return result_returning


# ---------------------------------------------------------------------------
# Session: create test database + run Alembic migrations
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def test_db() -> Generator[str]:
    """Create ``preiposip_test``, run Alembic migrations, yield the URL.

    Uses :func:`asyncio.run` for DB admin operations so this synchronous
    session-scoped fixture avoids event-loop conflicts with pytest-asyncio's
    per-function event loops. The test database is dropped on teardown.
    """

    async def _recreate_db(create: bool) -> None:
        conn = await asyncpg.connect(_TEST_ADMIN_CONN_URL)
        try:
            await conn.execute(
                "SELECT pg_terminate_backend(pid) FROM pg_stat_activity "
                "WHERE datname = $1 AND pid <> pg_backend_pid()",
                _TEST_DB_NAME,
            )
            await conn.execute(f'DROP DATABASE IF EXISTS "{_TEST_DB_NAME}"')
            if create:
                await conn.execute(f'CREATE DATABASE "{_TEST_DB_NAME}"')
        finally:
            await conn.close()

    asyncio.run(_recreate_db(create=True))

    subprocess.run(
        ["alembic", "upgrade", "head"],
        check=True,
        capture_output=True,
        env={**os.environ, "DATABASE_URL_DIRECT": _TEST_DB_URL},
    )

    yield _TEST_DB_URL

    asyncio.run(_recreate_db(create=False))


@pytest.fixture
async def session_factory(test_db: str) -> AsyncGenerator[async_sessionmaker[AsyncSession]]:
    """Sessionmaker on a private engine so each test gets its own event loop pool."""
    from preiposip.database import create_engine

    engine = create_engine(test_db)
    try:
        yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    finally:
        await engine.dispose()
