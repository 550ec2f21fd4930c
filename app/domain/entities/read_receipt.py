"""Domain entity recording that a user has seen a notification."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ReadReceipt:
    """Durable, write-once marker keyed by ``(notification_id, user_id)``."""

    notification_id: int
    user_id: int
    read_at: datetime | None = None


__all__ = ["ReadReceipt"]
