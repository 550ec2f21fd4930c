"""Repository implementations for infrastructure layer."""

from .notification_read_repository import NotificationReadRepository
from .notification_repository import NotificationRepository
from .user_repository import UserRepository

__all__ = [
    "NotificationReadRepository",
    "NotificationRepository",
    "UserRepository",
]
