from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from threading import Lock
from typing import Callable
from uuid import uuid4

from .models import Platform, Ticket, TicketMessage
from .state import TicketStateMachine, TicketStatus


class TicketNotFoundError(RuntimeError):
    """Raised when an operation targets a non-existent ticket."""


class TicketAlreadyCompleteError(RuntimeError):
    """Raised when a completed ticket is asked to accept more messages."""


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TicketRepository:
    """Process-lifetime store of tickets keyed by id.

    Stored records never leave the repository: every read or write returns a
    snapshot copy, so callers cannot mutate state behind the lock.
    """

    def __init__(self, *, clock: Callable[[], datetime] = _utcnow) -> None:
        self._tickets: dict[str, Ticket] = {}
        self._lock = Lock()
        self._clock = clock

    def create_ticket(
        self,
        *,
        display_username: str,
        platform: Platform,
        area_size: str,
        email: str,
    ) -> Ticket:
        ticket = Ticket(
            id=str(uuid4()),
            display_username=display_username,
            platform=platform,
            area_size=area_size,
            email=email,
            status=TicketStateMachine.initial_state(),
            created_at=self._clock(),
        )
        with self._lock:
            self._tickets[ticket.id] = ticket
            return self._snapshot(ticket)

    def get_ticket(self, ticket_id: str) -> Ticket | None:
        with self._lock:
            ticket = self._tickets.get(ticket_id)
            return None if ticket is None else self._snapshot(ticket)

    def add_message(self, ticket_id: str, text: str) -> Ticket:
        with self._lock:
            ticket = self._require(ticket_id)
            if not TicketStateMachine.accepts_messages(ticket.status):
                raise TicketAlreadyCompleteError("Ticket is already complete")
            ticket.messages.append(TicketMessage(text=text, at=self._clock()))
            return self._snapshot(ticket)

    def complete_ticket(self, ticket_id: str) -> Ticket:
        with self._lock:
            ticket = self._require(ticket_id)
            TicketStateMachine.assert_transition(ticket.status, TicketStatus.COMPLETE)
            ticket.status = TicketStatus.COMPLETE
            ticket.completed_at = self._clock()
            return self._snapshot(ticket)

    def count(self) -> int:
        with self._lock:
            return len(self._tickets)

    def _require(self, ticket_id: str) -> Ticket:
        ticket = self._tickets.get(ticket_id)
        if ticket is None:
            raise TicketNotFoundError(f"Ticket {ticket_id} not found")
        return ticket

    @staticmethod
    def _snapshot(ticket: Ticket) -> Ticket:
        return replace(ticket, messages=list(ticket.messages))
