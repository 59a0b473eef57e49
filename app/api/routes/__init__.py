"""Route modules exposed by the API package."""

from . import dashboard, health, ratings, tickets

__all__ = ["dashboard", "health", "ratings", "tickets"]
