# ==============================================================================
# CONNECTION SELECTOR
# ==============================================================================
# Connection string prefix -> backend variant -> open pool
# ==============================================================================

from __future__ import annotations

import logging
from typing import Dict, Optional, Type

from ticketdb.core.exceptions import UnsupportedBackendError
from ticketdb.core.settings import DatabaseType, Settings, get_settings
from ticketdb.database.adapters.base_adapter import BaseDatabaseAdapter
from ticketdb.database.adapters.postgres_adapter import PostgresAdapter
from ticketdb.database.adapters.sqlite_adapter import SQLiteAdapter
from ticketdb.database.dispatch import DatabaseHandle

logger = logging.getLogger(__name__)


_VARIANTS: Dict[DatabaseType, Type[BaseDatabaseAdapter]] = {
    DatabaseType.SQLITE: SQLiteAdapter,
    DatabaseType.POSTGRESQL: PostgresAdapter,
}


def supported_prefixes() -> list:
    """Connection string prefixes accepted by :func:`detect_database_type`."""
    return [adapter_cls.prefix for adapter_cls in _VARIANTS.values()]


def detect_database_type(connection_string: str) -> DatabaseType:
    """
    Classify a connection string by its literal prefix.

    Args:
        connection_string: ``sqlite://...`` or ``postgres://...``

    Returns:
        The matching backend variant

    Raises:
        UnsupportedBackendError: For any other prefix
    """
    for database_type, adapter_cls in _VARIANTS.items():
        if adapter_cls.matches(connection_string):
            return database_type
    raise UnsupportedBackendError(connection_string, supported=supported_prefixes())


def create_handle(
    connection_string: str,
    settings: Optional[Settings] = None,
) -> DatabaseHandle:
    """
    Build the (unconnected) handle variant for a connection string.

    Raises:
        UnsupportedBackendError: For an unsupported prefix
    """
    settings = settings or get_settings()
    database_type = detect_database_type(connection_string)
    adapter_cls = _VARIANTS[database_type]
    return adapter_cls(
        connection_string,
        pool_size=settings.DB_POOL_SIZE,
        echo=settings.DEBUG,
    )


async def open_database(
    connection_string: str,
    settings: Optional[Settings] = None,
) -> DatabaseHandle:
    """
    Select the backend for ``connection_string`` and open its pool.

    Every call opens a new, independent pool; nothing is cached.

    Args:
        connection_string: Database URL from the command line
        settings: Pool size and SQL echo (defaults to the cached settings)

    Returns:
        Connected database handle

    Raises:
        UnsupportedBackendError: Unknown prefix, nothing was attempted
        ConnectionError: The pool could not be opened
    """
    handle = create_handle(connection_string, settings)
    logger.info(f"Selected {handle.database_type.value} backend")
    await handle.connect()
    return handle
