# ==============================================================================
# DATABASE PACKAGE INITIALIZATION
# ==============================================================================

"""
Database Module
===============

Dual-backend access layer:
- Adapters: the SQLite and PostgreSQL handle variants
- Selector: connection string -> connected handle
- Dispatch: run one operation on whichever variant is active
- Repositories: the ticket operations
"""

from ticketdb.database.dispatch import DatabaseHandle, by_backend, run_on
from ticketdb.database.repositories.ticket_repository import TicketRepository
from ticketdb.database.selector import (
    create_handle,
    detect_database_type,
    open_database,
)

__all__ = [
    "DatabaseHandle",
    "by_backend",
    "run_on",
    "TicketRepository",
    "create_handle",
    "detect_database_type",
    "open_database",
]
