# ==============================================================================
# CONFTEST - Pytest Fixtures and Configuration
# ==============================================================================
# Temp-file SQLite handles for every test; PostgreSQL only when
# TICKETDB_TEST_POSTGRES_URL points at a disposable database
# ==============================================================================

from __future__ import annotations

import os
from pathlib import Path
from typing import AsyncGenerator

import pytest
import pytest_asyncio

from ticketdb.core.settings import Settings
from ticketdb.database.adapters.postgres_adapter import PostgresAdapter
from ticketdb.database.adapters.sqlite_adapter import SQLiteAdapter
from ticketdb.database.repositories.ticket_repository import TicketRepository
from ticketdb.database.selector import open_database

POSTGRES_URL_ENV = "TICKETDB_TEST_POSTGRES_URL"


# ==============================================================================
# SETTINGS FIXTURES
# ==============================================================================

@pytest.fixture
def settings() -> Settings:
    """Settings with defaults, independent of the process environment."""
    return Settings(
        APP_NAME="ticketdb-test",
        DEBUG=False,
        DB_POOL_SIZE=5,
        LOG_LEVEL="WARNING",
        LOG_FORMAT="text",
    )


# ==============================================================================
# SQLITE FIXTURES
# ==============================================================================

@pytest.fixture
def sqlite_path(tmp_path: Path) -> Path:
    return tmp_path / "test.db"


@pytest.fixture
def sqlite_url(sqlite_path: Path) -> str:
    """Absolute-path SQLite connection string in the pytest temp dir."""
    return f"sqlite://{sqlite_path}"


@pytest_asyncio.fixture
async def sqlite_handle(
    sqlite_url: str,
    settings: Settings,
) -> AsyncGenerator[SQLiteAdapter, None]:
    """Connected SQLite handle, disposed after the test."""
    handle = await open_database(sqlite_url, settings)
    yield handle
    await handle.disconnect()


@pytest_asyncio.fixture
async def repo(sqlite_handle: SQLiteAdapter) -> TicketRepository:
    """Ticket repository on a fresh SQLite file, table already created."""
    repository = TicketRepository(sqlite_handle)
    await repository.ensure_schema()
    return repository


# ==============================================================================
# POSTGRESQL FIXTURES
# ==============================================================================

@pytest.fixture
def postgres_url() -> str:
    url = os.environ.get(POSTGRES_URL_ENV)
    if not url:
        pytest.skip(f"{POSTGRES_URL_ENV} not set")
    return url


@pytest_asyncio.fixture
async def postgres_handle(
    postgres_url: str,
    settings: Settings,
) -> AsyncGenerator[PostgresAdapter, None]:
    """Connected PostgreSQL handle with the ticket table dropped around the test."""
    from sqlalchemy import text

    handle = await open_database(postgres_url, settings)
    async with handle.session() as session:
        await session.execute(text("DROP TABLE IF EXISTS ticket"))
    yield handle
    async with handle.session() as session:
        await session.execute(text("DROP TABLE IF EXISTS ticket"))
    await handle.disconnect()


# ==============================================================================
# HELPER FIXTURES
# ==============================================================================

@pytest.fixture
def write_file(tmp_path: Path):
    """Write text to a file in the temp dir and return its path as str."""
    def _write(name: str, content: str) -> str:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return str(path)
    return _write
