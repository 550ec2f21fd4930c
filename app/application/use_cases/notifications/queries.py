"""Per-user notification feed and administrative statistics."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from app.domain.entities import (
    Notification,
    NotificationPriority,
    NotificationType,
    UserContext,
)
from app.infrastructure.repositories import NotificationReadRepository, NotificationRepository
from app.utils import build_page_info, get_page_window, now_in_app_timezone
from app.utils.pagination import DEFAULT_PAGE_SIZE

from .audience import is_expired, is_scheduled
from .context import load_user_context, visible_notifications
from .validators import parse_notification_type, parse_priority


@dataclass(frozen=True)
class ListOptions:
    """Options accepted by :func:`list_for_user`; empty filter sets disable filtering."""

    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    include_read: bool = True
    types: frozenset[str] = frozenset()
    priorities: frozenset[str] = frozenset()


@dataclass(frozen=True)
class UserNotification:
    notification: Notification
    is_read: bool
    read_at: datetime | None = None


@dataclass(frozen=True)
class UserNotificationPage:
    items: list[UserNotification]
    page_info: dict[str, Any]
    unread_count: int


@dataclass(frozen=True)
class StatsOverview:
    total: int = 0
    active: int = 0
    urgent: int = 0
    expired: int = 0
    scheduled: int = 0


@dataclass(frozen=True)
class TypeStats:
    type: NotificationType
    sent: int
    read: int
    read_percentage: float


@dataclass(frozen=True)
class NotificationStats:
    overview: StatsOverview
    by_type: list[TypeStats] = field(default_factory=list)


def _feed_sort_key(item: UserNotification) -> tuple:
    notification = item.notification
    created_at = notification.created_at.timestamp() if notification.created_at else 0.0
    return (
        item.is_read,
        -notification.priority.rank,
        -created_at,
        -(notification.id or 0),
    )


def _parse_filter(values: Iterable[str], parser) -> set:
    return {parser(value) for value in values if str(value).strip()}


def list_for_user(
    session: Session,
    user_id: int,
    options: ListOptions | None = None,
    *,
    now: datetime | None = None,
    user: UserContext | None = None,
) -> UserNotificationPage:
    """Return the user's visible notifications, unread first, one page at a time.

    Ordering: unread before read, then priority (urgent first), then newest.
    ``unread_count`` covers every visible notification matching the type and
    priority filters, whatever ``include_read`` and the page are. A caller
    holding the requester's context already passes it as ``user``.
    """

    options = options or ListOptions()
    now = now or now_in_app_timezone()
    window = get_page_window(options.page, options.page_size)
    types = _parse_filter(options.types, parse_notification_type)
    priorities = _parse_filter(options.priorities, parse_priority)

    user = user or load_user_context(session, user_id)
    read_times = NotificationReadRepository(session).read_times_for_user(user.user_id)

    matching: list[UserNotification] = []
    for notification in visible_notifications(session, user, now):
        if types and notification.type not in types:
            continue
        if priorities and notification.priority not in priorities:
            continue
        read_at = read_times.get(notification.id)
        matching.append(
            UserNotification(
                notification=notification,
                is_read=notification.id in read_times,
                read_at=read_at,
            )
        )

    unread_count = sum(1 for item in matching if not item.is_read)
    if not options.include_read:
        matching = [item for item in matching if not item.is_read]

    matching.sort(key=_feed_sort_key)
    page_items = matching[window.offset : window.offset + window.page_size]
    return UserNotificationPage(
        items=page_items,
        page_info=build_page_info(len(matching), window),
        unread_count=unread_count,
    )


def aggregate_stats(session: Session, *, now: datetime | None = None) -> NotificationStats:
    """Summarise every stored notification and the receipts recorded against them."""

    now = now or now_in_app_timezone()
    notifications = NotificationRepository(session).list_all()
    receipts = NotificationReadRepository(session).count_by_notification()

    overview = StatsOverview(
        total=len(notifications),
        active=sum(1 for n in notifications if n.is_active),
        urgent=sum(1 for n in notifications if n.priority is NotificationPriority.URGENT),
        expired=sum(1 for n in notifications if is_expired(n, now)),
        scheduled=sum(1 for n in notifications if is_scheduled(n, now)),
    )

    sent: dict[NotificationType, int] = defaultdict(int)
    read: dict[NotificationType, int] = defaultdict(int)
    for notification in notifications:
        if not notification.is_active:
            continue
        sent[notification.type] += 1
        read[notification.type] += receipts.get(notification.id, 0)

    by_type = [
        TypeStats(
            type=notification_type,
            sent=count,
            read=read[notification_type],
            read_percentage=round(read[notification_type] * 100.0 / count, 2) if count else 0.0,
        )
        for notification_type, count in sent.items()
    ]
    by_type.sort(key=lambda stats: (-stats.sent, stats.type.value))
    return NotificationStats(overview=overview, by_type=by_type)


__all__ = [
    "ListOptions",
    "NotificationStats",
    "StatsOverview",
    "TypeStats",
    "UserNotification",
    "UserNotificationPage",
    "aggregate_stats",
    "list_for_user",
]
