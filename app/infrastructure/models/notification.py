"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.sql import expression
from sqlalchemy.types import JSON

from app.infrastructure.database import Base
from app.utils import ensure_app_naive_datetime, now_in_app_timezone

_notification_json_type = JSONB().with_variant(JSON(), "sqlite")


def _now_naive():
    return ensure_app_naive_datetime(now_in_app_timezone())


class NotificationModel(Base):
    """Database representation of a broadcast notification."""

    __tablename__ = "notification"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    type = Column(String(20), nullable=False, index=True)
    priority = Column(String(10), nullable=False, index=True)
    target_audience = Column(String(10), nullable=False)
    target_company_id = Column(Integer, nullable=True, index=True)
    target_user_id = Column(Integer, nullable=True, index=True)
    target_roles = Column(_notification_json_type, nullable=True)
    is_active = Column(
        Boolean,
        nullable=False,
        default=True,
        server_default=expression.true(),
        index=True,
    )
    schedule_for = Column(DateTime(), nullable=True)
    expires_at = Column(DateTime(), nullable=True)
    metadata_json = Column("metadata", _notification_json_type, nullable=False, default=dict)
    created_by = Column(String(255), nullable=False, default="system")
    created_at = Column(DateTime(), nullable=False, default=_now_naive)
    updated_at = Column(DateTime(), nullable=False, default=_now_naive)


__all__ = ["NotificationModel"]
