"""Use cases tracking which notifications each user has read."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from sqlalchemy.orm import Session

from app.domain.entities import MAX_IDENTIFIER, UserContext
from app.domain.exceptions import ValidationError
from app.infrastructure.repositories import NotificationReadRepository
from app.utils import now_in_app_timezone

from .context import load_user_context, visible_notifications


def _receipt_id(value: int, *, field: str) -> int:
    notification_id = int(value)
    if not 1 <= notification_id <= MAX_IDENTIFIER:
        raise ValidationError(
            f"Identificador de notificação fora do intervalo: {value}", field=field
        )
    return notification_id


def mark_read(session: Session, notification_id: int, user_id: int) -> None:
    """Record that ``user_id`` read the notification.

    Repeating the call is a no-op. The notification id is not checked against
    the store, so retries after a deactivation or for unknown ids succeed.
    """

    notification_id = _receipt_id(notification_id, field="notification_id")
    NotificationReadRepository(session).mark_as_read([notification_id], user_id=user_id)


def mark_read_batch(
    session: Session, notification_ids: Iterable[int], user_id: int
) -> int:
    """Mark every id as read atomically and return how many distinct ids were given."""

    ids = {_receipt_id(value, field="notification_ids") for value in notification_ids}
    if not ids:
        raise ValidationError(
            "A lista de IDs de notificações é obrigatória", field="notification_ids"
        )
    return NotificationReadRepository(session).mark_as_read(ids, user_id=user_id)


def is_read(session: Session, notification_id: int, user_id: int) -> bool:
    return NotificationReadRepository(session).get(notification_id, user_id=user_id) is not None


def unread_count(
    session: Session,
    user_id: int,
    now: datetime | None = None,
    *,
    user: UserContext | None = None,
) -> int:
    """Count notifications visible to the user that have no receipt yet.

    Callers that already resolved the requester pass it as ``user`` so the
    directory is not queried again.
    """

    now = now or now_in_app_timezone()
    user = user or load_user_context(session, user_id)
    read_ids = NotificationReadRepository(session).read_times_for_user(user.user_id)
    return sum(
        1
        for notification in visible_notifications(session, user, now)
        if notification.id not in read_ids
    )


__all__ = ["is_read", "mark_read", "mark_read_batch", "unread_count"]
