# ==============================================================================
# DATABASE ADAPTERS PACKAGE
# ==============================================================================

"""
Database Adapters
=================

The two variants of the database handle:
- SQLiteAdapter: SQLite using aiosqlite
- PostgresAdapter: PostgreSQL using asyncpg
"""

from ticketdb.database.adapters.base_adapter import BaseDatabaseAdapter
from ticketdb.database.adapters.postgres_adapter import PostgresAdapter
from ticketdb.database.adapters.sqlite_adapter import SQLiteAdapter

__all__ = [
    "BaseDatabaseAdapter",
    "PostgresAdapter",
    "SQLiteAdapter",
]
