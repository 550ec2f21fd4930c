"""Use cases owning the notification lifecycle."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from sqlalchemy.orm import Session

from app.domain.entities import Notification, NotificationSpec
from app.domain.exceptions import NotFoundError
from app.infrastructure.repositories import NotificationRepository
from app.utils import PageWindow, now_in_app_timezone

from .validators import build_notification, parse_notification_type, parse_priority

logger = logging.getLogger(__name__)

NOTIFICATION_RESOURCE = "Notificação"


@dataclass(frozen=True)
class NotificationFilters:
    """Administrative listing filters; ``None`` disables a filter."""

    search: str | None = None
    type: str | None = None
    priority: str | None = None
    is_active: bool | None = None


def create_notification(session: Session, spec: NotificationSpec) -> Notification:
    """Validate ``spec`` and persist it as a new active notification."""

    entity = build_notification(spec)
    notification = NotificationRepository(session).create(entity)
    logger.info(
        "Notification %s created by %s for audience '%s'",
        notification.id,
        notification.created_by,
        notification.audience.tag,
    )
    return notification


def get_notification(session: Session, notification_id: int) -> Notification:
    notification = NotificationRepository(session).get(notification_id)
    if notification is None:
        raise NotFoundError(NOTIFICATION_RESOURCE, notification_id)
    return notification


def deactivate_notification(session: Session, notification_id: int) -> Notification:
    """Soft-delete the notification; repeating the call keeps it inactive."""

    notification = NotificationRepository(session).deactivate(
        notification_id, updated_at=now_in_app_timezone()
    )
    if notification is None:
        raise NotFoundError(NOTIFICATION_RESOURCE, notification_id)
    logger.info("Notification %s deactivated", notification_id)
    return notification


def list_all_notifications(
    session: Session,
    filters: NotificationFilters,
    window: PageWindow,
) -> tuple[Sequence[Notification], int]:
    """Return one page of notifications regardless of audience, plus the total."""

    notification_type = parse_notification_type(filters.type).value if filters.type else None
    priority = parse_priority(filters.priority).value if filters.priority else None
    return NotificationRepository(session).search(
        search=filters.search,
        notification_type=notification_type,
        priority=priority,
        is_active=filters.is_active,
        skip=window.offset,
        limit=window.page_size,
    )


__all__ = [
    "NOTIFICATION_RESOURCE",
    "NotificationFilters",
    "create_notification",
    "deactivate_notification",
    "get_notification",
    "list_all_notifications",
]
