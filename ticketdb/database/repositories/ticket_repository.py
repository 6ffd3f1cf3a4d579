# ==============================================================================
# TICKET REPOSITORY
# ==============================================================================
# ensure-schema, insert-returning-id, select raw, select typed; each one
# written once and dispatched to the active backend
# ==============================================================================

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Iterable, List, Tuple

from sqlalchemy import select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ticketdb.core.constants import DEFAULT_TICKET_NAME
from ticketdb.core.exceptions import QueryError, SchemaError
from ticketdb.database.dispatch import DatabaseHandle, by_backend, run_on
from ticketdb.domain_models.ticket import Ticket

logger = logging.getLogger(__name__)


# The two dialects have no common auto-increment column syntax
SQLITE_TICKET_DDL = """
CREATE TABLE IF NOT EXISTS ticket (
  id integer primary key autoincrement,
  name text
)"""

POSTGRES_TICKET_DDL = """
CREATE TABLE IF NOT EXISTS ticket (
  id bigserial primary key,
  name text
)"""

INSERT_TICKET_SQL = "insert into ticket (name) values (:name) returning id"

SELECT_ALL_SQL = "SELECT * FROM ticket"


def returned_id(row: Any) -> int:
    """
    Normalise the row returned by ``... returning id`` to the new id.

    Accepts a SQLAlchemy ``Row``, a plain mapping or a plain tuple.
    """
    if isinstance(row, Mapping):
        return int(row["id"])
    mapping = getattr(row, "_mapping", None)
    if mapping is not None and "id" in mapping:
        return int(mapping["id"])
    return int(row[0])


def format_tickets(pairs: Iterable[Tuple[int, str]]) -> str:
    """Render ``(id, name)`` pairs as ``"id - name"`` joined by ``", "``."""
    return ", ".join(f"{ticket_id} - {name}" for ticket_id, name in pairs)


class TicketRepository:
    """
    Ticket operations on a database handle.

    Every method runs the same code on both backends through
    :func:`run_on`; only :meth:`ensure_schema` chooses dialect-specific
    SQL. Failures are wrapped in :class:`SchemaError` / :class:`QueryError`
    and are meant to abort the run.

    Example:
        >>> repo = TicketRepository(handle)
        >>> await repo.ensure_schema()
        >>> new_id = await repo.insert()
        >>> print(await repo.describe_all())
        1 - a new ticket
    """

    def __init__(self, handle: DatabaseHandle) -> None:
        self._handle = handle

    @property
    def handle(self) -> DatabaseHandle:
        return self._handle

    async def ensure_schema(self) -> None:
        """Create the ``ticket`` table if it does not exist."""
        ddl = by_backend(
            self._handle,
            sqlite=SQLITE_TICKET_DDL,
            postgresql=POSTGRES_TICKET_DDL,
        )

        async def block(session: AsyncSession) -> None:
            await session.execute(text(ddl))

        try:
            await run_on(self._handle, block)
        except SQLAlchemyError as e:
            raise SchemaError(f"Failed to create ticket table: {e}") from e
        logger.debug("ticket table ensured")

    async def insert(self, name: str = DEFAULT_TICKET_NAME) -> int:
        """
        Insert one ticket and return its id in the same round trip.

        Args:
            name: Ticket name

        Returns:
            Backend-assigned id
        """
        async def block(session: AsyncSession) -> int:
            result = await session.execute(text(INSERT_TICKET_SQL), {"name": name})
            return returned_id(result.one())

        try:
            new_id = await run_on(self._handle, block)
        except SQLAlchemyError as e:
            raise QueryError(f"Failed to insert ticket: {e}", details={"name": name}) from e
        logger.debug(f"Inserted ticket id={new_id}")
        return new_id

    async def fetch_all_raw(self) -> List[Tuple[int, str]]:
        """
        Fetch every row, reading ``id`` and ``name`` by column name.

        Returns:
            ``(id, name)`` pairs in backend order
        """
        async def block(session: AsyncSession) -> List[Tuple[int, str]]:
            result = await session.execute(text(SELECT_ALL_SQL))
            return [(int(row["id"]), row["name"]) for row in result.mappings()]

        try:
            pairs = await run_on(self._handle, block)
        except SQLAlchemyError as e:
            raise QueryError(f"Failed to select tickets: {e}") from e
        logger.debug(f"Selected {len(pairs)} raw ticket rows")
        return pairs

    async def describe_all(self) -> str:
        """Every ticket rendered as ``"id - name, id - name, ..."``."""
        return format_tickets(await self.fetch_all_raw())

    async def fetch_all(self) -> List[Ticket]:
        """
        Fetch every row as a :class:`Ticket`.

        Returns:
            Tickets in backend order
        """
        async def block(session: AsyncSession) -> List[Ticket]:
            result = await session.execute(select(Ticket))
            return list(result.scalars().all())

        try:
            tickets = await run_on(self._handle, block)
        except SQLAlchemyError as e:
            raise QueryError(f"Failed to select tickets: {e}") from e
        logger.debug(f"Selected {len(tickets)} tickets")
        return tickets
