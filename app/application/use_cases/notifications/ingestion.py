"""Normalise administrative and webhook requests into :class:`NotificationSpec`."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from app.domain.entities import (
    AUDIENCE_ALL,
    AUDIENCE_TAGS,
    Notification,
    NotificationPriority,
    NotificationSpec,
    NotificationType,
)
from app.domain.exceptions import ValidationError
from app.utils import now_in_app_timezone, parse_app_datetime

from .store import create_notification
from .validators import ensure_metadata, require_text

logger = logging.getLogger(__name__)

UNKNOWN_AGENT = "unknown"


@dataclass(frozen=True)
class WebhookProvenance:
    """Where and when a webhook payload was received."""

    source: str
    user_agent: str | None = None
    client_ip: str | None = None
    received_at: datetime | None = None

    def as_metadata(self) -> dict[str, Any]:
        received_at = self.received_at or now_in_app_timezone()
        return {
            "source": self.source,
            "webhook_source": self.user_agent or UNKNOWN_AGENT,
            "webhook_ip": self.client_ip,
            "webhook_received_at": received_at.isoformat(),
        }


def build_admin_spec(payload: Mapping[str, Any], *, created_by: str) -> NotificationSpec:
    """Map the structured administrative request onto the creation contract."""

    return NotificationSpec(
        title=payload.get("title"),
        message=payload.get("message"),
        type=payload.get("type") or NotificationType.INFO.value,
        priority=payload.get("priority") or NotificationPriority.NORMAL.value,
        target_audience=payload.get("target_audience") or AUDIENCE_ALL,
        target_company_id=payload.get("target_company_id"),
        target_user_id=payload.get("target_user_id"),
        target_roles=payload.get("target_roles"),
        schedule_for=payload.get("schedule_for"),
        expires_at=payload.get("expires_at"),
        metadata=payload.get("metadata") or {},
        created_by=created_by,
    )


def create_admin_notification(
    session: Session, payload: Mapping[str, Any], *, created_by: str
) -> Notification:
    """Create a notification requested by an administrator.

    The caller is expected to have checked the administrator privilege.
    """

    return create_notification(session, build_admin_spec(payload, created_by=created_by))


def _coerce_identifier(value: Any, *, field: str) -> Any:
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    raise ValidationError(f"'{field}' deve ser um identificador numérico", field=field)


def _coerce_roles(value: Any) -> Any:
    if isinstance(value, str):
        return [role for role in (part.strip() for part in value.split(",")) if role]
    return value


def _parse_instant(value: Any, *, field: str) -> datetime | None:
    try:
        return parse_app_datetime(value)
    except (ValueError, OverflowError) as exc:
        raise ValidationError(
            f"'{field}' deve estar no formato ISO-8601", field=field
        ) from exc


def _parse_target(value: Any) -> str:
    if value is None:
        return AUDIENCE_ALL
    if not isinstance(value, str) or value.strip().lower() not in AUDIENCE_TAGS:
        raise ValidationError(
            f"Destino inválido: '{value}'. Valores aceitos: {', '.join(AUDIENCE_TAGS)}",
            field="target",
        )
    return value.strip().lower()


def normalize_webhook_payload(
    payload: Any, *, provenance: WebhookProvenance
) -> NotificationSpec:
    """Reshape a loose webhook body into a :class:`NotificationSpec`.

    Provenance keys always overwrite producer-supplied metadata of the same name.
    """

    if not isinstance(payload, Mapping):
        raise ValidationError("O corpo do webhook deve ser um objeto JSON", field="body")

    metadata = ensure_metadata(payload.get("metadata"))
    metadata.update(provenance.as_metadata())

    return NotificationSpec(
        title=require_text(payload.get("title"), field="title"),
        message=require_text(payload.get("message"), field="message"),
        type=payload.get("type") or NotificationType.INFO.value,
        priority=payload.get("priority") or NotificationPriority.NORMAL.value,
        target_audience=_parse_target(payload.get("target")),
        target_company_id=_coerce_identifier(
            payload.get("target_company_id"), field="target_company_id"
        ),
        target_user_id=_coerce_identifier(
            payload.get("target_user_id"), field="target_user_id"
        ),
        target_roles=_coerce_roles(payload.get("target_roles")),
        schedule_for=_parse_instant(payload.get("schedule_for"), field="schedule_for"),
        expires_at=_parse_instant(payload.get("expires_at"), field="expires_at"),
        metadata=metadata,
        created_by=provenance.source,
    )


def ingest_webhook(
    session: Session, payload: Any, *, provenance: WebhookProvenance
) -> Notification:
    """Create a notification from an external producer.

    Each call creates a new notification; retried deliveries are not merged.
    """

    try:
        spec = normalize_webhook_payload(payload, provenance=provenance)
        notification = create_notification(session, spec)
    except ValidationError as exc:
        logger.warning(
            "Rejected webhook payload from %s (%s): %s",
            provenance.client_ip,
            provenance.source,
            exc.message,
        )
        raise
    logger.info(
        "Webhook notification %s received from %s", notification.id, provenance.client_ip
    )
    return notification


__all__ = [
    "WebhookProvenance",
    "build_admin_spec",
    "create_admin_notification",
    "ingest_webhook",
    "normalize_webhook_payload",
]
