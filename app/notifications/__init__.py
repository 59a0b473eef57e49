"""Email notifications sent during a ticket's lifecycle."""

from .gateway import Notification, NotificationError, NotificationGateway, SmtpNotificationGateway
from .messages import NotificationComposer

__all__ = [
    "Notification",
    "NotificationComposer",
    "NotificationError",
    "NotificationGateway",
    "SmtpNotificationGateway",
]
