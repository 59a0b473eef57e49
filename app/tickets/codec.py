"""Conversion between ticket ids and the tokens embedded in owner links.

The token is plain unpadded base64url of the id. Anyone holding a link can
read the id back out of it; it only keeps raw ids out of URLs.
"""

from __future__ import annotations

import base64
import binascii


def encode_ticket_id(ticket_id: str) -> str:
    encoded = base64.urlsafe_b64encode(ticket_id.encode("utf-8"))
    return encoded.decode("ascii").rstrip("=")


def decode_ticket_id(token: str | None) -> str | None:
    """Return the id carried by ``token`` or ``None`` if it cannot be decoded."""

    if not token:
        return None
    token = token.strip()
    padded = token + "=" * (-len(token) % 4)
    try:
        raw = base64.urlsafe_b64decode(padded.encode("ascii"))
        decoded = raw.decode("utf-8")
    except (binascii.Error, UnicodeError, ValueError):
        return None
    return decoded or None
