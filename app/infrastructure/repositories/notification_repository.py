"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import desc, or_
from sqlalchemy.orm import Session

from app.domain.entities import (
    Audience,
    CompanyAudience,
    Notification,
    NotificationPriority,
    NotificationType,
    RolesAudience,
    UserAudience,
    build_audience,
)
from app.infrastructure.models import NotificationModel
from app.utils import ensure_app_naive_datetime, ensure_app_timezone, now_in_app_timezone

from .errors import storage_guard


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class NotificationRepository:
    """Provide storage operations for :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, notification_id: int) -> Notification | None:
        with storage_guard(self.session, "notification lookup"):
            model = self.session.get(NotificationModel, notification_id)
        return self._to_entity(model) if model else None

    def create(self, notification: Notification) -> Notification:
        with storage_guard(self.session, "notification creation"):
            model = NotificationModel()
            self._apply_entity_to_model(model, notification)
            now = ensure_app_naive_datetime(now_in_app_timezone())
            model.created_at = ensure_app_naive_datetime(notification.created_at) or now
            model.updated_at = model.created_at
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        return self._to_entity(model)

    def deactivate(
        self, notification_id: int, *, updated_at: datetime | None = None
    ) -> Notification | None:
        """Flag the notification as inactive; ``None`` when it does not exist."""

        with storage_guard(self.session, "notification deactivation"):
            model = self.session.get(NotificationModel, notification_id)
            if model is None:
                return None
            model.is_active = False
            model.updated_at = ensure_app_naive_datetime(
                updated_at or now_in_app_timezone()
            )
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        return self._to_entity(model)

    def list_active(self) -> Sequence[Notification]:
        """Return every notification still flagged active, newest first."""

        with storage_guard(self.session, "active notification listing"):
            models = (
                self.session.query(NotificationModel)
                .filter(NotificationModel.is_active.is_(True))
                .order_by(desc(NotificationModel.created_at), desc(NotificationModel.id))
                .all()
            )
        return [self._to_entity(model) for model in models]

    def list_all(self) -> Sequence[Notification]:
        with storage_guard(self.session, "notification listing"):
            models = self.session.query(NotificationModel).all()
        return [self._to_entity(model) for model in models]

    def search(
        self,
        *,
        search: str | None = None,
        notification_type: str | None = None,
        priority: str | None = None,
        is_active: bool | None = None,
        skip: int = 0,
        limit: int | None = None,
    ) -> tuple[Sequence[Notification], int]:
        """Return one page of notifications matching the filters and the total."""

        with storage_guard(self.session, "notification search"):
            query = self.session.query(NotificationModel)
            if search:
                pattern = f"%{_escape_like(search.strip())}%"
                query = query.filter(
                    or_(
                        NotificationModel.title.ilike(pattern, escape="\\"),
                        NotificationModel.message.ilike(pattern, escape="\\"),
                    )
                )
            if notification_type:
                query = query.filter(NotificationModel.type == notification_type)
            if priority:
                query = query.filter(NotificationModel.priority == priority)
            if is_active is not None:
                query = query.filter(NotificationModel.is_active.is_(is_active))

            total = query.count()
            query = query.order_by(
                desc(NotificationModel.created_at), desc(NotificationModel.id)
            )
            if skip:
                query = query.offset(skip)
            if limit is not None:
                query = query.limit(limit)
            models = query.all()
        return [self._to_entity(model) for model in models], total

    @staticmethod
    def _apply_entity_to_model(model: NotificationModel, notification: Notification) -> None:
        model.title = notification.title
        model.message = notification.message
        model.type = notification.type.value
        model.priority = notification.priority.value
        model.is_active = notification.is_active
        model.schedule_for = ensure_app_naive_datetime(notification.schedule_for)
        model.expires_at = ensure_app_naive_datetime(notification.expires_at)
        model.metadata_json = dict(notification.metadata or {})
        model.created_by = notification.created_by
        NotificationRepository._apply_audience(model, notification.audience)

    @staticmethod
    def _apply_audience(model: NotificationModel, audience: Audience) -> None:
        model.target_audience = audience.tag
        model.target_company_id = None
        model.target_user_id = None
        model.target_roles = None
        if isinstance(audience, CompanyAudience):
            model.target_company_id = audience.company_id
        elif isinstance(audience, UserAudience):
            model.target_user_id = audience.user_id
        elif isinstance(audience, RolesAudience):
            model.target_roles = sorted(audience.roles)

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        audience = build_audience(
            model.target_audience,
            company_id=model.target_company_id,
            user_id=model.target_user_id,
            roles=model.target_roles,
        )
        return Notification(
            id=model.id,
            title=model.title,
            message=model.message,
            type=NotificationType(model.type),
            priority=NotificationPriority(model.priority),
            audience=audience,
            is_active=bool(model.is_active),
            schedule_for=ensure_app_timezone(model.schedule_for),
            expires_at=ensure_app_timezone(model.expires_at),
            metadata=dict(model.metadata_json or {}),
            created_by=model.created_by,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["NotificationRepository"]
