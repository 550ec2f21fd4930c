"""Use cases for targeting, delivering and tracking notifications."""

from .audience import audience_matches, is_expired, is_scheduled, is_visible
from .ingestion import (
    WebhookProvenance,
    build_admin_spec,
    create_admin_notification,
    ingest_webhook,
    normalize_webhook_payload,
)
from .queries import (
    ListOptions,
    NotificationStats,
    StatsOverview,
    TypeStats,
    UserNotification,
    UserNotificationPage,
    aggregate_stats,
    list_for_user,
)
from .read_state import is_read, mark_read, mark_read_batch, unread_count
from .store import (
    NotificationFilters,
    create_notification,
    deactivate_notification,
    get_notification,
    list_all_notifications,
)

__all__ = [
    "ListOptions",
    "NotificationFilters",
    "NotificationStats",
    "StatsOverview",
    "TypeStats",
    "UserNotification",
    "UserNotificationPage",
    "WebhookProvenance",
    "aggregate_stats",
    "audience_matches",
    "build_admin_spec",
    "create_admin_notification",
    "create_notification",
    "deactivate_notification",
    "get_notification",
    "ingest_webhook",
    "is_expired",
    "is_read",
    "is_scheduled",
    "is_visible",
    "list_all_notifications",
    "list_for_user",
    "mark_read",
    "mark_read_batch",
    "normalize_webhook_payload",
    "unread_count",
]
