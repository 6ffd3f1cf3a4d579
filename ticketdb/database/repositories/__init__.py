# ==============================================================================
# REPOSITORIES PACKAGE
# ==============================================================================

from ticketdb.database.repositories.ticket_repository import (
    TicketRepository,
    format_tickets,
    returned_id,
)

__all__ = [
    "TicketRepository",
    "format_tickets",
    "returned_id",
]
