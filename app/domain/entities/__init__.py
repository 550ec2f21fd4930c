"""Domain entities exposed by the application."""

from .notification import (
    AUDIENCE_ALL,
    AUDIENCE_COMPANY,
    AUDIENCE_ROLE,
    AUDIENCE_TAGS,
    AUDIENCE_USER,
    MAX_IDENTIFIER,
    ROLE_ADMIN,
    ROLE_EMPLOYEE,
    ROLE_HR,
    AllAudience,
    Audience,
    CompanyAudience,
    Notification,
    NotificationPriority,
    NotificationSpec,
    NotificationType,
    RolesAudience,
    UserAudience,
    build_audience,
)
from .read_receipt import ReadReceipt
from .user_context import UserContext

__all__ = [
    "AUDIENCE_ALL",
    "AUDIENCE_COMPANY",
    "AUDIENCE_ROLE",
    "AUDIENCE_TAGS",
    "AUDIENCE_USER",
    "MAX_IDENTIFIER",
    "AllAudience",
    "Audience",
    "CompanyAudience",
    "Notification",
    "NotificationPriority",
    "NotificationSpec",
    "NotificationType",
    "ROLE_ADMIN",
    "ROLE_EMPLOYEE",
    "ROLE_HR",
    "ReadReceipt",
    "RolesAudience",
    "UserAudience",
    "UserContext",
    "build_audience",
]
