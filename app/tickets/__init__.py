"""Ticket domain: models, storage, lifecycle."""

from .codec import decode_ticket_id, encode_ticket_id
from .models import Platform, Ticket, TicketMessage
from .repository import TicketAlreadyCompleteError, TicketNotFoundError, TicketRepository
from .service import TicketCreation, TicketService, TicketValidationError
from .state import TicketStateMachine, TicketStatus

__all__ = [
    "Platform",
    "Ticket",
    "TicketAlreadyCompleteError",
    "TicketCreation",
    "TicketMessage",
    "TicketNotFoundError",
    "TicketRepository",
    "TicketService",
    "TicketStateMachine",
    "TicketStatus",
    "TicketValidationError",
    "decode_ticket_id",
    "encode_ticket_id",
]
