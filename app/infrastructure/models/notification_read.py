"""SQLAlchemy model for notification read receipts."""

from sqlalchemy import Column, DateTime, Integer, UniqueConstraint

from app.infrastructure.database import Base


class NotificationReadModel(Base):
    """One row per user that has read a notification.

    ``notification_id`` carries no foreign key: receipts for unknown
    notifications are accepted and kept.
    """

    __tablename__ = "notification_read"
    __table_args__ = (
        UniqueConstraint("notification_id", "user_id", name="uq_notification_read_pair"),
    )

    id = Column(Integer, primary_key=True, index=True)
    notification_id = Column(Integer, nullable=False, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    read_at = Column(DateTime(), nullable=False)


__all__ = ["NotificationReadModel"]
