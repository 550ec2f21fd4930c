from .health import HealthRead
from .notification import (
    AdminNotificationPage,
    MarkReadResponse,
    NotificationCreate,
    NotificationMarkReadRequest,
    NotificationRead,
    NotificationStatsRead,
    PageInfo,
    StatsOverviewRead,
    TypeStatsRead,
    UnreadCountRead,
    UserNotificationPage,
    UserNotificationRead,
    WebhookNotificationAck,
)

__all__ = [
    "AdminNotificationPage",
    "HealthRead",
    "MarkReadResponse",
    "NotificationCreate",
    "NotificationMarkReadRequest",
    "NotificationRead",
    "NotificationStatsRead",
    "PageInfo",
    "StatsOverviewRead",
    "TypeStatsRead",
    "UnreadCountRead",
    "UserNotificationPage",
    "UserNotificationRead",
    "WebhookNotificationAck",
]
