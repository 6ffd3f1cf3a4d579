# ==============================================================================
# SQLITE ADAPTER - SQLAlchemy Async with aiosqlite
# ==============================================================================
# Selected by connection strings starting with "sqlite://"
# ==============================================================================

from __future__ import annotations

from typing import Any, Dict

from ticketdb.core.constants import ConnectionPrefixes
from ticketdb.core.settings import DatabaseType
from ticketdb.database.adapters.base_adapter import BaseDatabaseAdapter


class SQLiteAdapter(BaseDatabaseAdapter):
    """
    SQLite database adapter using SQLAlchemy async with aiosqlite.

    Connection strings:
        sqlite://test.db          relative file, created if missing
        sqlite:///var/db/t.db     absolute file
        sqlite://:memory:         private in-memory database

    File databases use a queue pool capped at ``pool_size``. An in-memory
    database only exists inside one connection, so it is served by a
    single shared connection instead.
    """

    database_type = DatabaseType.SQLITE
    prefix = ConnectionPrefixes.SQLITE

    @classmethod
    def to_async_url(cls, connection_string: str) -> str:
        path = connection_string[len(cls.prefix):]
        return f"{ConnectionPrefixes.SQLITE_ASYNC}{path}"

    @property
    def is_memory(self) -> bool:
        return ":memory:" in self._database_url or self._database_url.endswith(":///")

    def engine_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {
            "echo": self._echo,
            "connect_args": {"check_same_thread": False},
        }
        if not self.is_memory:
            options["pool_size"] = self._pool_size
            options["max_overflow"] = 0
        return options
