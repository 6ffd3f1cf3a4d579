# ==============================================================================
# BACKEND DISPATCH
# ==============================================================================
# Run one logical operation against whichever backend variant is active
# ==============================================================================

"""
Dispatch helpers for the database handle.

A handle is exactly one of the adapter variants listed in
``DatabaseHandle``. Call sites stay backend-agnostic by passing their
work to :func:`run_on`; the few statements whose SQL text differs
between dialects pick it with :func:`by_backend`::

    ddl = by_backend(handle, sqlite=SQLITE_DDL, postgresql=POSTGRES_DDL)
    await run_on(handle, lambda session: session.execute(text(ddl)))
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, TypeVar, Union

from sqlalchemy.ext.asyncio import AsyncSession

from ticketdb.core.settings import DatabaseType
from ticketdb.database.adapters.postgres_adapter import PostgresAdapter
from ticketdb.database.adapters.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)

T = TypeVar("T")

DatabaseHandle = Union[SQLiteAdapter, PostgresAdapter]

HANDLE_VARIANTS = (SQLiteAdapter, PostgresAdapter)


def _unknown_variant(handle: object) -> TypeError:
    return TypeError(
        f"Not a database handle: {handle!r}. "
        f"Expected one of {[cls.__name__ for cls in HANDLE_VARIANTS]}"
    )


def by_backend(handle: DatabaseHandle, *, sqlite: T, postgresql: T) -> T:
    """
    Pick the value matching the handle's backend variant.

    Args:
        handle: Connected or unconnected database handle
        sqlite: Value used for the SQLite variant
        postgresql: Value used for the PostgreSQL variant

    Returns:
        ``sqlite`` or ``postgresql``

    Raises:
        TypeError: If ``handle`` is not one of the handle variants
    """
    if isinstance(handle, SQLiteAdapter) and handle.database_type is DatabaseType.SQLITE:
        return sqlite
    if isinstance(handle, PostgresAdapter) and handle.database_type is DatabaseType.POSTGRESQL:
        return postgresql
    raise _unknown_variant(handle)


async def run_on(
    handle: DatabaseHandle,
    block: Callable[[AsyncSession], Awaitable[T]],
) -> T:
    """
    Run ``block`` with a session on the active variant's pool.

    The block is the same for every variant; only the pool bound into
    the session differs. The session commits when the block returns and
    rolls back if it raises.

    Args:
        handle: Connected database handle
        block: Coroutine function receiving the session

    Returns:
        Whatever ``block`` returns
    """
    if not isinstance(handle, HANDLE_VARIANTS):
        raise _unknown_variant(handle)

    logger.debug(f"Dispatching to {handle.database_type.value} pool")
    async with handle.session() as session:
        return await block(session)
