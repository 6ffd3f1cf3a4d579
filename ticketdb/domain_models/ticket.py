# ==============================================================================
# TICKET MODEL
# ==============================================================================
# The single record stored by ticketdb
# ==============================================================================

from __future__ import annotations

from typing import Optional

from sqlalchemy import BigInteger, Text
from sqlalchemy.orm import Mapped, mapped_column

from ticketdb.core.constants import DatabaseConstants
from ticketdb.domain_models.base import SQLBase


class Ticket(SQLBase):
    """
    A ticket row.

    Attributes:
        id: Backend-assigned identifier (autoincrement on SQLite,
            bigserial on PostgreSQL)
        name: Free text

    Rows are append-only; nothing in ticketdb updates or deletes them.
    """

    __tablename__ = DatabaseConstants.TICKET_TABLE

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    name: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
