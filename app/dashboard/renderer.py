from __future__ import annotations

import json
from dataclasses import dataclass
from html import escape

from app.tickets.models import Ticket

_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{title}</title>
  <style>
    *, *::before, *::after {{ box-sizing: border-box; margin: 0; padding: 0; }}
    body {{ font-family: 'Segoe UI', sans-serif; background: #070d1a; color: #c8d8f0; min-height: 100vh; }}
    .container {{ max-width: 700px; margin: 0 auto; padding: 32px 16px; }}
    .header {{ text-align: center; margin-bottom: 32px; }}
    .logo {{ font-size: 22px; color: #7eb3ff; letter-spacing: 3px; margin-bottom: 8px; }}
    .card {{ background: #0d1526; border: 1px solid #1e3a6e; border-radius: 16px; padding: 24px; margin-bottom: 20px; }}
    .card-title {{ font-size: 14px; color: #4a7aae; letter-spacing: 2px; text-transform: uppercase; margin-bottom: 20px; }}
    .field {{ display: flex; justify-content: space-between; padding: 12px 0; border-bottom: 1px solid #1e3a6e22; }}
    .field-label {{ color: #6b9bd2; font-size: 13px; }}
    .field-value {{ color: #e0e8ff; font-weight: 600; font-size: 15px; }}
    .message {{ padding: 10px 0; border-bottom: 1px solid #1e3a6e22; }}
    .message time {{ color: #4a6a9e; font-size: 12px; }}
    textarea {{ width: 100%; background: #0a1224; border: 1px solid #1e3a6e; border-radius: 10px; color: #c8d8f0; font-size: 15px; padding: 14px; min-height: 100px; }}
    .btn {{ width: 100%; padding: 14px; border: none; border-radius: 10px; font-weight: 700; letter-spacing: 2px; cursor: pointer; text-transform: uppercase; margin-top: 12px; }}
    .btn-send {{ background: #1a4aee; color: #fff; }}
    .btn-complete {{ background: #1a6e2a; color: #7eff9e; }}
    .toast {{ position: fixed; top: 24px; right: 24px; background: #1a3a6e; color: #7eb3ff; padding: 14px 24px; border-radius: 12px; display: none; }}
  </style>
</head>
<body>
  <div class="toast" id="toast"></div>
  <div class="container">
    <div class="header"><div class="logo">{service_name}</div><div>Owner Portal</div></div>
    {content}
  </div>
  {script}
</body>
</html>"""

_SCRIPT = """<script>
    const ticketId = {ticket_id};
    const apiBase = window.location.origin;

    function showToast(msg) {{
      const t = document.getElementById('toast');
      t.textContent = msg;
      t.style.display = 'block';
      setTimeout(() => {{ t.style.display = 'none'; }}, 4000);
    }}

    async function post(path, body) {{
      try {{
        const res = await fetch(apiBase + '/api/ticket/' + ticketId + path, {{
          method: 'POST',
          headers: {{ 'Content-Type': 'application/json' }},
          body: JSON.stringify(body || {{}})
        }});
        return await res.json();
      }} catch (e) {{
        return {{ error: 'Network error' }};
      }}
    }}

    async function sendMessage() {{
      const input = document.getElementById('messageInput');
      const msg = input.value.trim();
      if (!msg) return showToast('Please type a message first.');
      const data = await post('/message', {{ message: msg }});
      if (data.success) {{
        showToast('Message sent to player!');
        setTimeout(() => location.reload(), 1500);
      }} else {{
        showToast('Failed: ' + (data.error || 'Unknown error'));
      }}
    }}

    async function completeTicket() {{
      if (!confirm('Mark this ticket as complete?')) return;
      const data = await post('/complete');
      if (data.success) {{
        showToast('Ticket marked as complete!');
        setTimeout(() => location.reload(), 1500);
      }} else {{
        showToast('Failed: ' + (data.error || 'Unknown error'));
      }}
    }}
  </script>"""


def _field(label: str, value: str) -> str:
    return f'<div class="field"><span class="field-label">{label}</span><span class="field-value">{escape(value)}</span></div>'


@dataclass(slots=True)
class DashboardRenderer:
    """Render the owner portal for a single ticket."""

    service_name: str

    def render_ticket(self, ticket: Ticket) -> str:
        if ticket.is_complete:
            content = (
                '<div class="card" style="text-align:center; padding:40px;">'
                '<div style="color:#7eff9e; font-size:18px; margin-bottom:8px;">TICKET COMPLETE</div>'
                "<div>This ticket has been marked as complete and is no longer active.</div>"
                "</div>"
            )
            return self._page(content, script="")

        details = "".join(
            (
                _field("Username", ticket.display_username),
                _field("Platform", ticket.platform.label),
                _field("Area Size", ticket.area_size),
                _field("Email", ticket.email),
                _field("Submitted", ticket.created_at.strftime("%b %d, %Y %H:%M UTC")),
                _field("Status", ticket.status.value.title()),
            )
        )
        content = f'<div class="card"><div class="card-title">Ticket Details</div>{details}</div>'
        if ticket.messages:
            history = "".join(
                f'<div class="message"><time>{message.at.strftime("%b %d, %H:%M")}</time>'
                f"<div>{escape(message.text)}</div></div>"
                for message in ticket.messages
            )
            content += f'<div class="card"><div class="card-title">Sent Messages</div>{history}</div>'
        content += (
            '<div class="card"><div class="card-title">Send Message to Player</div>'
            '<textarea id="messageInput" placeholder="Type your message to the player..."></textarea>'
            '<button class="btn btn-send" onclick="sendMessage()">Send Message</button></div>'
            '<div class="card"><div class="card-title">Complete Ticket</div>'
            "<p>Mark this ticket as complete. The player will be asked to leave a review.</p>"
            '<button class="btn btn-complete" onclick="completeTicket()">Mark as Complete</button></div>'
        )
        return self._page(content, script=_SCRIPT.format(ticket_id=json.dumps(ticket.id)))

    def render_error(self, message: str) -> str:
        return self._page(f'<div class="card" style="text-align:center;">{escape(message)}</div>', script="")

    def _page(self, content: str, *, script: str) -> str:
        name = escape(self.service_name)
        return _PAGE.format(title=f"Owner Portal - {name}", service_name=name, content=content, script=script)
