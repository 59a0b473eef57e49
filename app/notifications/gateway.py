from __future__ import annotations

import asyncio
import logging
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from email.utils import formataddr
from typing import Protocol

from opentelemetry import trace

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


class NotificationError(RuntimeError):
    """Raised when a notification could not be delivered."""


@dataclass(slots=True, frozen=True)
class Notification:
    """A rendered email ready to be handed to a gateway."""

    recipient: str
    subject: str
    html: str
    sender_name: str | None = None


class NotificationGateway(Protocol):
    async def send(self, notification: Notification) -> None:
        ...


class SmtpNotificationGateway:
    """Deliver notifications through an SMTP relay.

    ``smtplib`` blocks, so each send runs in a worker thread; callers still
    await delivery before answering the request. Nothing is retried.
    """

    def __init__(
        self,
        *,
        host: str,
        port: int,
        username: str | None,
        password: str | None,
        use_tls: bool = True,
        timeout: float = 10.0,
    ) -> None:
        self._host = host
        self._port = port
        self._username = username
        self._password = password
        self._use_tls = use_tls
        self._timeout = timeout

    @property
    def configured(self) -> bool:
        return bool(self._username and self._password)

    async def send(self, notification: Notification) -> None:
        if not self.configured:
            raise NotificationError("SMTP credentials are not configured")

        with tracer.start_as_current_span("notification.send") as span:
            span.set_attribute("smtp.host", self._host)
            try:
                message = self._build_message(notification)
            except ValueError as exc:
                span.record_exception(exc)
                raise NotificationError(f"Cannot build email for {notification.recipient!r}: {exc}") from exc
            try:
                await asyncio.to_thread(self._deliver, message)
            except (smtplib.SMTPException, OSError, ValueError) as exc:
                span.record_exception(exc)
                raise NotificationError(f"Failed to send email to {notification.recipient}: {exc}") from exc
        logger.info("Sent '%s' to %s", notification.subject, notification.recipient)

    def _build_message(self, notification: Notification) -> EmailMessage:
        message = EmailMessage()
        sender = self._username or ""
        message["From"] = formataddr((notification.sender_name, sender)) if notification.sender_name else sender
        message["To"] = notification.recipient
        message["Subject"] = notification.subject
        message.set_content("This message requires an HTML capable email client.")
        message.add_alternative(notification.html, subtype="html")
        return message

    def _deliver(self, message: EmailMessage) -> None:
        with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as smtp:
            if self._use_tls:
                smtp.starttls()
            smtp.login(self._username or "", self._password or "")
            smtp.send_message(message)
