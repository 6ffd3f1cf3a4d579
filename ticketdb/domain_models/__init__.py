# ==============================================================================
# DOMAIN MODELS PACKAGE
# ==============================================================================

from ticketdb.domain_models.base import SQLBase
from ticketdb.domain_models.ticket import Ticket

__all__ = [
    "SQLBase",
    "Ticket",
]
