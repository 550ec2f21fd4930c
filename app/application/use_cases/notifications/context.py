"""Shared lookups for the per-user notification views."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Session

from app.domain.entities import Notification, UserContext
from app.domain.exceptions import NotFoundError
from app.infrastructure.repositories import NotificationRepository, UserRepository

from .audience import is_visible

USER_RESOURCE = "Usuário"


def load_user_context(session: Session, user_id: int) -> UserContext:
    user = UserRepository(session).get_context(user_id)
    if user is None:
        raise NotFoundError(USER_RESOURCE, user_id)
    return user


def visible_notifications(
    session: Session, user: UserContext, now: datetime
) -> list[Notification]:
    """Return the active notifications ``user`` can see at ``now``."""

    return [
        notification
        for notification in NotificationRepository(session).list_active()
        if is_visible(notification, user, now)
    ]


__all__ = ["USER_RESOURCE", "load_user_context", "visible_notifications"]
