"""ORM models used by the application infrastructure."""

from .notification import NotificationModel
from .notification_read import NotificationReadModel
from .user import UserModel

__all__ = [
    "NotificationModel",
    "NotificationReadModel",
    "UserModel",
]
