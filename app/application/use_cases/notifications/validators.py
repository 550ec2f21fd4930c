"""Validation helpers turning a creation request into a notification."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from app.domain.entities import (
    Notification,
    NotificationPriority,
    NotificationSpec,
    NotificationType,
    build_audience,
)
from app.domain.exceptions import ValidationError
from app.utils import ensure_app_timezone

TITLE_MAX_LENGTH = 255


def _enum_value(value: Any, enum_cls, *, field: str, label: str):
    if isinstance(value, enum_cls):
        return value
    normalized = str(value).strip().lower() if value is not None else ""
    try:
        return enum_cls(normalized)
    except ValueError as exc:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(
            f"{label} inválido(a): '{value}'. Valores aceitos: {allowed}", field=field
        ) from exc


def parse_notification_type(value: Any) -> NotificationType:
    return _enum_value(value, NotificationType, field="type", label="Tipo de notificação")


def parse_priority(value: Any) -> NotificationPriority:
    return _enum_value(value, NotificationPriority, field="priority", label="Prioridade")


def require_text(value: Any, *, field: str, max_length: int | None = None) -> str:
    """Return ``value`` stripped, rejecting missing or blank text."""

    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"'{field}' é obrigatório", field=field)
    text = value.strip()
    if max_length is not None and len(text) > max_length:
        raise ValidationError(
            f"'{field}' deve ter no máximo {max_length} caracteres", field=field
        )
    return text


def ensure_metadata(value: Any) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ValidationError("'metadata' deve ser um objeto chave/valor", field="metadata")
    return {str(key): item for key, item in value.items()}


def _localize(value: datetime | None, *, field: str) -> datetime | None:
    # Instants near datetime.min/max cannot be shifted into the app timezone.
    try:
        return ensure_app_timezone(value)
    except OverflowError as exc:
        raise ValidationError(f"'{field}' fora do intervalo suportado", field=field) from exc


def ensure_time_window(
    schedule_for: datetime | None, expires_at: datetime | None
) -> tuple[datetime | None, datetime | None]:
    """Normalise both instants and reject an expiry at or before the schedule."""

    for field_name, value in (("schedule_for", schedule_for), ("expires_at", expires_at)):
        if value is not None and not isinstance(value, datetime):
            raise ValidationError(f"'{field_name}' deve ser uma data/hora", field=field_name)

    schedule_for = _localize(schedule_for, field="schedule_for")
    expires_at = _localize(expires_at, field="expires_at")
    if schedule_for is not None and expires_at is not None and expires_at <= schedule_for:
        raise ValidationError(
            "'expires_at' deve ser posterior a 'schedule_for'", field="expires_at"
        )
    return schedule_for, expires_at


def build_notification(spec: NotificationSpec) -> Notification:
    """Validate ``spec`` and return the unsaved :class:`Notification`."""

    title = require_text(spec.title, field="title", max_length=TITLE_MAX_LENGTH)
    message = require_text(spec.message, field="message")
    notification_type = parse_notification_type(spec.type)
    priority = parse_priority(spec.priority)
    audience = build_audience(
        spec.target_audience,
        company_id=spec.target_company_id,
        user_id=spec.target_user_id,
        roles=spec.target_roles,
    )
    schedule_for, expires_at = ensure_time_window(spec.schedule_for, spec.expires_at)
    created_by = (spec.created_by or "").strip() or "system"

    return Notification(
        id=None,
        title=title,
        message=message,
        type=notification_type,
        priority=priority,
        audience=audience,
        is_active=True,
        schedule_for=schedule_for,
        expires_at=expires_at,
        metadata=ensure_metadata(spec.metadata),
        created_by=created_by,
    )


__all__ = [
    "build_notification",
    "ensure_metadata",
    "ensure_time_window",
    "parse_notification_type",
    "parse_priority",
    "require_text",
]
