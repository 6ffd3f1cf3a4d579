# ==============================================================================
# APPLICATION CONSTANTS
# ==============================================================================
# Fixed values shared by the selector, the repository and the CLI
# ==============================================================================

from __future__ import annotations

from typing import Final


# ==============================================================================
# CONNECTION STRING PREFIXES
# ==============================================================================

class ConnectionPrefixes:
    """Literal prefixes recognised by the connection selector."""

    SQLITE: Final[str] = "sqlite://"
    POSTGRES: Final[str] = "postgres://"

    # SQLAlchemy async driver URLs the prefixes are rewritten to
    SQLITE_ASYNC: Final[str] = "sqlite+aiosqlite:///"
    POSTGRES_ASYNC: Final[str] = "postgresql+asyncpg://"


# ==============================================================================
# DATABASE CONSTANTS
# ==============================================================================

class DatabaseConstants:
    """Database-related constants."""

    TICKET_TABLE: Final[str] = "ticket"

    # Maximum concurrent connections held by either backend's pool
    DEFAULT_POOL_SIZE: Final[int] = 5


# Name given to the row inserted on every run
DEFAULT_TICKET_NAME: Final[str] = "a new ticket"

# Verbosity at which the effective options are dumped as JSON and YAML
OPTIONS_DUMP_VERBOSITY: Final[int] = 5

# Separator printed between the JSON and YAML dumps
DUMP_SEPARATOR: Final[str] = "==========="
