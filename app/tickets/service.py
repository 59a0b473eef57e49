from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .codec import decode_ticket_id, encode_ticket_id
from .models import Platform, Ticket, display_username
from .repository import TicketAlreadyCompleteError, TicketNotFoundError, TicketRepository

if TYPE_CHECKING:
    from app.notifications.gateway import NotificationGateway
    from app.notifications.messages import NotificationComposer

logger = logging.getLogger(__name__)


class TicketValidationError(ValueError):
    """Raised when a request is missing fields or carries invalid values."""


@dataclass(slots=True)
class TicketCreation:
    ticket: Ticket
    owner_link: str


def _present(value: str | None) -> bool:
    return bool(value and value.strip())


@dataclass(slots=True)
class TicketService:
    """Orchestrates ticket creation, operator messages and completion.

    Store mutations are applied before any email is sent. A failed send
    surfaces as ``NotificationError`` but leaves the mutation in place.
    """

    repository: TicketRepository
    gateway: NotificationGateway
    composer: NotificationComposer
    base_url: str

    def owner_link(self, ticket_id: str) -> str:
        return f"{self.base_url.rstrip('/')}/ticket?{encode_ticket_id(ticket_id)}"

    async def create_ticket(
        self,
        *,
        username: str | None,
        platform: str | None,
        area_size: str | None,
        email: str | None,
    ) -> TicketCreation:
        if not all(_present(value) for value in (username, platform, area_size, email)):
            raise TicketValidationError("Missing required fields")
        try:
            edition = Platform(platform.strip().lower())
        except ValueError as exc:
            raise TicketValidationError(f"Unsupported platform: {platform}") from exc

        ticket = self.repository.create_ticket(
            display_username=display_username(username, edition),
            platform=edition,
            area_size=area_size,
            email=email,
        )
        link = self.owner_link(ticket.id)
        logger.info("Created ticket %s for %s (%s)", ticket.reference, ticket.display_username, edition.value)

        await self.gateway.send(self.composer.ticket_received(ticket))
        alert = self.composer.new_ticket_alert(ticket, link)
        if alert is None:
            logger.warning("No operator email configured; skipping alert for ticket %s", ticket.reference)
        else:
            await self.gateway.send(alert)
        return TicketCreation(ticket=ticket, owner_link=link)

    def get_ticket(self, ticket_id: str) -> Ticket:
        ticket = self.repository.get_ticket(ticket_id)
        if ticket is None:
            raise TicketNotFoundError(f"Ticket {ticket_id} not found")
        return ticket

    def resolve_owner_token(self, token: str | None) -> Ticket:
        """Look up the ticket an owner link points at."""

        ticket_id = decode_ticket_id(token)
        if ticket_id is None:
            raise TicketNotFoundError("Ticket not found")
        return self.get_ticket(ticket_id)

    async def send_operator_message(self, ticket_id: str, text: str | None) -> Ticket:
        # Order matters: an unknown ticket is a 404 and a closed one a 400
        # before the message body is even looked at.
        current = self.get_ticket(ticket_id)
        if current.is_complete:
            raise TicketAlreadyCompleteError("Ticket is already complete")
        if not _present(text):
            raise TicketValidationError("Message is required")

        ticket = self.repository.add_message(ticket_id, text)
        logger.info("Operator message added to ticket %s", ticket.reference)
        await self.gateway.send(self.composer.operator_message(ticket, text))
        return ticket

    async def complete_ticket(self, ticket_id: str) -> Ticket:
        ticket = self.repository.complete_ticket(ticket_id)
        logger.info("Ticket %s marked complete", ticket.reference)
        await self.gateway.send(self.composer.review_request(ticket))
        return ticket

    def count(self) -> int:
        return self.repository.count()
