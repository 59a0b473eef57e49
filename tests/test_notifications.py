from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from app.notifications import gateway as gateway_module
from app.notifications.gateway import Notification, NotificationError, SmtpNotificationGateway
from app.tickets.models import Platform, Ticket
from app.tickets.state import TicketStatus


def _ticket() -> Ticket:
    return Ticket(
        id="0f8fad5b-d9cb-469f-a165-70867728950e",
        display_username=".Foo",
        platform=Platform.BEDROCK,
        area_size="32x32",
        email="a@b.com",
        status=TicketStatus.OPEN,
        created_at=datetime(2024, 5, 1, tzinfo=timezone.utc),
    )


def test_ticket_received_email(composer):
    notification = composer.ticket_received(_ticket())

    assert notification.recipient == "a@b.com"
    assert "Received" in notification.subject
    assert ".Foo" in notification.html
    assert "Bedrock Edition" in notification.html
    assert "0F8FAD5B" in notification.html


def test_new_ticket_alert_contains_owner_link(composer):
    link = "https://tickets.example.com/ticket?abc"
    notification = composer.new_ticket_alert(_ticket(), link)

    assert notification.recipient == "owner@example.com"
    assert notification.subject == "New Mining Ticket from .Foo"
    assert f'href="{link}"' in notification.html
    assert "a@b.com" in notification.html


def test_new_ticket_alert_needs_operator_address(composer):
    composer.operator_email = None
    assert composer.new_ticket_alert(_ticket(), "https://x") is None


def test_operator_message_is_not_escaped(composer):
    notification = composer.operator_message(_ticket(), "<b>Meet at spawn</b>")
    assert "<b>Meet at spawn</b>" in notification.html
    assert notification.subject.startswith("Evan Sent You a Message")


def test_review_request_mentions_area_size(composer):
    notification = composer.review_request(_ticket())
    assert "completed your 32x32 mining area" in notification.html
    assert "Leave a Review" in notification.subject


def _smtp_gateway(**overrides) -> SmtpNotificationGateway:
    options = {
        "host": "smtp.example.com",
        "port": 587,
        "username": "sender@example.com",
        "password": "secret",
    }
    options.update(overrides)
    return SmtpNotificationGateway(**options)


def _notification() -> Notification:
    return Notification(recipient="a@b.com", subject="Hello", html="<p>Hi</p>", sender_name="Evans Mining Service")


@pytest.mark.asyncio
async def test_smtp_gateway_sends_html_message(monkeypatch):
    smtp_instance = MagicMock()
    smtp_factory = MagicMock()
    smtp_factory.return_value.__enter__.return_value = smtp_instance
    monkeypatch.setattr(gateway_module.smtplib, "SMTP", smtp_factory)

    await _smtp_gateway().send(_notification())

    smtp_factory.assert_called_once_with("smtp.example.com", 587, timeout=10.0)
    smtp_instance.starttls.assert_called_once()
    smtp_instance.login.assert_called_once_with("sender@example.com", "secret")
    message = smtp_instance.send_message.call_args.args[0]
    assert message["To"] == "a@b.com"
    assert message["Subject"] == "Hello"
    assert "Evans Mining Service" in message["From"]
    assert "sender@example.com" in message["From"]
    assert message.get_body(preferencelist=("html",)).get_content().strip() == "<p>Hi</p>"


@pytest.mark.asyncio
async def test_smtp_gateway_skips_tls_when_disabled(monkeypatch):
    smtp_instance = MagicMock()
    smtp_factory = MagicMock()
    smtp_factory.return_value.__enter__.return_value = smtp_instance
    monkeypatch.setattr(gateway_module.smtplib, "SMTP", smtp_factory)

    await _smtp_gateway(use_tls=False).send(_notification())

    smtp_instance.starttls.assert_not_called()


@pytest.mark.asyncio
async def test_smtp_gateway_wraps_transport_errors(monkeypatch):
    smtp_factory = MagicMock(side_effect=OSError("connection refused"))
    monkeypatch.setattr(gateway_module.smtplib, "SMTP", smtp_factory)

    with pytest.raises(NotificationError, match="connection refused"):
        await _smtp_gateway().send(_notification())


@pytest.mark.asyncio
async def test_smtp_gateway_without_credentials_fails(monkeypatch):
    smtp_factory = MagicMock()
    monkeypatch.setattr(gateway_module.smtplib, "SMTP", smtp_factory)

    gateway = _smtp_gateway(password=None)
    assert not gateway.configured
    with pytest.raises(NotificationError, match="not configured"):
        await gateway.send(_notification())
    smtp_factory.assert_not_called()


@pytest.mark.asyncio
async def test_smtp_gateway_rejects_header_injection(monkeypatch):
    smtp_factory = MagicMock()
    monkeypatch.setattr(gateway_module.smtplib, "SMTP", smtp_factory)
    notification = Notification(recipient="a@b.com", subject="New Mining Ticket from Foo\nBcc: evil@x", html="<p/>")

    with pytest.raises(NotificationError, match="Cannot build email"):
        await _smtp_gateway().send(notification)
    smtp_factory.assert_not_called()
