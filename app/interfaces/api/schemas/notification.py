"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field

from app.domain.entities import MAX_IDENTIFIER

NotificationId = Annotated[int, Field(ge=1, le=MAX_IDENTIFIER)]


class NotificationCreate(BaseModel):
    """Administrative creation request.

    Enumerated fields are plain strings; the service reports invalid values.
    """

    model_config = ConfigDict(extra="forbid")

    title: str
    message: str
    type: str = "info"
    priority: str = "normal"
    target_audience: str = "all"
    target_company_id: int | None = None
    target_user_id: int | None = None
    target_roles: list[str] | None = None
    schedule_for: datetime | None = None
    expires_at: datetime | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class NotificationRead(BaseModel):
    """Full representation returned to administrators."""

    id: int
    title: str
    message: str
    type: str
    priority: str
    target_audience: str
    target_company_id: int | None = None
    target_user_id: int | None = None
    target_roles: list[str] | None = None
    is_active: bool
    schedule_for: datetime | None = None
    expires_at: datetime | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_by: str
    created_at: datetime
    updated_at: datetime | None = None


class UserNotificationRead(BaseModel):
    """Notification as listed in a user's feed."""

    id: int
    title: str
    message: str
    type: str
    priority: str
    target_audience: str
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_by: str
    created_at: datetime
    schedule_for: datetime | None = None
    expires_at: datetime | None = None
    is_read: bool
    read_at: datetime | None = None


class PageInfo(BaseModel):
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int
    has_next_page: bool
    has_previous_page: bool
    next_page: int | None = None
    previous_page: int | None = None


class UserNotificationPage(BaseModel):
    notifications: list[UserNotificationRead]
    pagination: PageInfo
    unread_count: int


class AdminNotificationPage(BaseModel):
    notifications: list[NotificationRead]
    pagination: PageInfo


class UnreadCountRead(BaseModel):
    unread_count: int


class NotificationMarkReadRequest(BaseModel):
    """Payload used to mark a batch of notifications as read."""

    notification_ids: list[NotificationId] = Field(
        ..., min_length=1, description="Identificadores das notificações"
    )


class MarkReadResponse(BaseModel):
    success: bool = True
    marked: int
    message: str


class WebhookNotificationAck(BaseModel):
    """Only the public fields of a notification created through the webhook."""

    id: int
    title: str
    type: str
    created_at: datetime


class StatsOverviewRead(BaseModel):
    total: int
    active: int
    urgent: int
    expired: int
    scheduled: int


class TypeStatsRead(BaseModel):
    type: str
    sent: int
    read: int
    read_percentage: float


class NotificationStatsRead(BaseModel):
    overview: StatsOverviewRead
    by_type: list[TypeStatsRead]


__all__ = [
    "AdminNotificationPage",
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
