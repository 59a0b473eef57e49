from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from .state import TicketStatus

BEDROCK_PREFIX = "."
OPERATOR_SENDER = "operator"


class Platform(str, Enum):
    """Game editions a player can be on."""

    JAVA = "java"
    BEDROCK = "bedrock"

    @property
    def label(self) -> str:
        return "Bedrock Edition" if self is Platform.BEDROCK else "Java Edition"


def display_username(username: str, platform: Platform) -> str:
    """Return the in-game name: Bedrock players carry a leading ``.``."""

    if platform is Platform.BEDROCK:
        return f"{BEDROCK_PREFIX}{username}"
    return username


@dataclass(slots=True, frozen=True)
class TicketMessage:
    """Message sent by the operator to the ticket's submitter."""

    text: str
    at: datetime
    sender: str = OPERATOR_SENDER


@dataclass(slots=True)
class Ticket:
    """A player's service request."""

    id: str
    display_username: str
    platform: Platform
    area_size: str
    email: str
    status: TicketStatus
    created_at: datetime
    completed_at: datetime | None = None
    messages: list[TicketMessage] = field(default_factory=list)

    @property
    def reference(self) -> str:
        """Short human-friendly reference shown in email footers."""

        return self.id[:8].upper()

    @property
    def is_complete(self) -> bool:
        return self.status == TicketStatus.COMPLETE
