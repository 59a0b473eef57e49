from __future__ import annotations

from dataclasses import dataclass

from app.tickets.models import Ticket

from .gateway import Notification

_LAYOUT = """<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><style>
  body {{ font-family: 'Segoe UI', sans-serif; background: #0a0e1a; color: #e0e8ff; margin: 0; padding: 0; }}
  .container {{ max-width: 600px; margin: 40px auto; background: #0d1526; border: 1px solid #1e3a6e; border-radius: 16px; overflow: hidden; }}
  .header {{ background: {header_background}; padding: 40px 32px; text-align: center; }}
  .header h1 {{ margin: 0; font-size: 24px; color: {header_color}; letter-spacing: 2px; }}
  .header p {{ margin: 8px 0 0; color: #a0c0ff; font-size: 14px; }}
  .body {{ padding: 32px; color: #8090b0; }}
  .card {{ background: #0a1830; border: 1px solid #1e3a6e; border-radius: 12px; padding: 20px; margin: 20px 0; }}
  .label {{ color: #6b9bd2; font-size: 12px; text-transform: uppercase; letter-spacing: 1px; margin-bottom: 4px; }}
  .value {{ color: #e0e8ff; font-size: 16px; font-weight: 600; margin-bottom: 16px; }}
  .btn {{ display: inline-block; background: #1a4aee; color: #fff; text-decoration: none; padding: 14px 28px; border-radius: 10px; font-weight: 700; }}
  .footer {{ background: #070d1a; padding: 20px 32px; text-align: center; color: #4a6a9e; font-size: 12px; border-top: 1px solid #1e3a6e; }}
</style></head>
<body>
  <div class="container">
    <div class="header"><h1>{title}</h1><p>{tagline}</p></div>
    <div class="body">{body}</div>
    <div class="footer">{service_name} &bull; {server_name} &bull; Ticket ID: {reference}</div>
  </div>
</body>
</html>"""

_BLUE = ("linear-gradient(135deg, #0d2b6e, #1a4a9e)", "#7eb3ff")
_GREEN = ("linear-gradient(135deg, #1a3a0d, #2a5a1a)", "#7eff9e")


def _field(label: str, value: str) -> str:
    return f'<div class="label">{label}</div><div class="value">{value}</div>'


@dataclass(slots=True)
class NotificationComposer:
    """Render the emails a ticket produces over its lifetime.

    Ticket fields and operator messages are inserted as given, without HTML
    escaping.
    """

    service_name: str
    operator_name: str
    server_name: str
    operator_email: str | None = None

    def ticket_received(self, ticket: Ticket) -> Notification:
        body = (
            f"<p>Hey <strong>{ticket.display_username}</strong>,</p>"
            f"<p>Your mining ticket has been successfully submitted! {self.operator_name} will review "
            "your request and get back to you soon.</p>"
            '<div class="card">'
            f"{_field('Username', ticket.display_username)}"
            f"{_field('Platform', ticket.platform.label)}"
            f"{_field('Area Size', ticket.area_size)}"
            f"{_field('Status', 'Open')}"
            "</div>"
            f"<p>You'll receive another email once {self.operator_name} responds.</p>"
        )
        return Notification(
            recipient=ticket.email,
            subject=f"Your Mining Ticket Has Been Received - {self.service_name}",
            html=self._render(ticket, _BLUE, self.service_name.upper(), f"{self.server_name} Official Ticket System", body),
            sender_name=self.service_name,
        )

    def new_ticket_alert(self, ticket: Ticket, owner_link: str) -> Notification | None:
        """Alert for the operator; ``None`` when no operator address is set."""

        if not self.operator_email:
            return None
        body = (
            '<div class="card">'
            f"{_field('Username', ticket.display_username)}"
            f"{_field('Platform', ticket.platform.label)}"
            f"{_field('Area Size Requested', ticket.area_size)}"
            f"{_field('Contact Email', ticket.email)}"
            "</div>"
            f'<p style="text-align:center;"><a href="{owner_link}" class="btn">Open Owner Dashboard</a></p>'
            "<p>Click the link above to view and respond to this ticket from your owner portal.</p>"
        )
        return Notification(
            recipient=self.operator_email,
            subject=f"New Mining Ticket from {ticket.display_username}",
            html=self._render(ticket, _GREEN, "NEW TICKET ALERT", "Someone needs your mining services!", body),
            sender_name=f"{self.service_name} Tickets",
        )

    def operator_message(self, ticket: Ticket, text: str) -> Notification:
        body = (
            f"<p>Hey <strong>{ticket.display_username}</strong>,</p>"
            '<div class="card">'
            f"<div class=\"label\">{self.operator_name} says:</div>"
            f'<div class="value">{text}</div>'
            "</div>"
            "<p>Whenever you're ready, reply to this email or head to the server to get started!</p>"
        )
        return Notification(
            recipient=ticket.email,
            subject=f"{self.operator_name} Sent You a Message - {self.service_name}",
            html=self._render(
                ticket, _BLUE, self.service_name.upper(), f"You have a new message from {self.operator_name}!", body
            ),
            sender_name=f"{self.operator_name} - {self.service_name}",
        )

    def review_request(self, ticket: Ticket) -> Notification:
        body = (
            f"<p>Hey <strong>{ticket.display_username}</strong>,</p>"
            f"<p>{self.operator_name} has completed your {ticket.area_size} mining area! "
            "Head to the server to check it out.</p>"
            '<div class="card" style="text-align:center;">'
            "<strong>Would you leave a review?</strong><br><br>"
            f'Head to the {self.service_name} website and click "Leave a Review" to share your experience.'
            "</div>"
            f"<p>Thank you for using {self.service_name}!</p>"
        )
        return Notification(
            recipient=ticket.email,
            subject=f"Your Mining Plot is Complete! Leave a Review - {self.service_name}",
            html=self._render(ticket, _GREEN, "PLOT COMPLETE!", f"Your mining area is ready on {self.server_name}!", body),
            sender_name=f"{self.operator_name} - {self.service_name}",
        )

    def _render(self, ticket: Ticket, palette: tuple[str, str], title: str, tagline: str, body: str) -> str:
        background, color = palette
        return _LAYOUT.format(
            header_background=background,
            header_color=color,
            title=title,
            tagline=tagline,
            body=body,
            service_name=self.service_name,
            server_name=self.server_name,
            reference=ticket.reference,
        )
