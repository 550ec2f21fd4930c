"""Rotas de notificações: feed do usuário, administração e webhook."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Path, Query, Request, status
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    ListOptions,
    NotificationFilters,
    UserNotification,
    WebhookProvenance,
    aggregate_stats as aggregate_stats_uc,
    create_admin_notification as create_admin_notification_uc,
    deactivate_notification as deactivate_notification_uc,
    get_notification as get_notification_uc,
    ingest_webhook as ingest_webhook_uc,
    list_all_notifications as list_all_notifications_uc,
    list_for_user as list_for_user_uc,
    mark_read as mark_read_uc,
    mark_read_batch as mark_read_batch_uc,
    unread_count as unread_count_uc,
)
from app.config import Settings, get_settings
from app.domain.entities import (
    MAX_IDENTIFIER,
    CompanyAudience,
    Notification,
    RolesAudience,
    UserAudience,
    UserContext,
)
from app.domain.exceptions import NotificationError
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import (
    get_current_active_user,
    require_admin,
    verify_webhook_token,
)
from app.interfaces.api.routes_helpers import parse_csv, to_http_exception
from app.interfaces.api.schemas import (
    AdminNotificationPage,
    MarkReadResponse,
    NotificationCreate,
    NotificationMarkReadRequest,
    NotificationRead,
    NotificationStatsRead,
    UnreadCountRead,
    UserNotificationPage,
    UserNotificationRead,
    WebhookNotificationAck,
)
from app.utils import build_page_info, get_page_window
from app.utils.pagination import DEFAULT_PAGE_SIZE

router = APIRouter(prefix="/notifications", tags=["notifications"])

_ALL = "all"


def _notification_to_schema(notification: Notification) -> NotificationRead:
    audience = notification.audience
    return NotificationRead(
        id=notification.id or 0,
        title=notification.title,
        message=notification.message,
        type=notification.type.value,
        priority=notification.priority.value,
        target_audience=audience.tag,
        target_company_id=audience.company_id if isinstance(audience, CompanyAudience) else None,
        target_user_id=audience.user_id if isinstance(audience, UserAudience) else None,
        target_roles=sorted(audience.roles) if isinstance(audience, RolesAudience) else None,
        is_active=notification.is_active,
        schedule_for=notification.schedule_for,
        expires_at=notification.expires_at,
        metadata=notification.metadata or {},
        created_by=notification.created_by,
        created_at=notification.created_at,
        updated_at=notification.updated_at,
    )


def _feed_item_to_schema(item: UserNotification) -> UserNotificationRead:
    notification = item.notification
    return UserNotificationRead(
        id=notification.id or 0,
        title=notification.title,
        message=notification.message,
        type=notification.type.value,
        priority=notification.priority.value,
        target_audience=notification.audience.tag,
        metadata=notification.metadata or {},
        created_by=notification.created_by,
        created_at=notification.created_at,
        schedule_for=notification.schedule_for,
        expires_at=notification.expires_at,
        is_read=item.is_read,
        read_at=item.read_at,
    )


def _optional_filter(value: str | None) -> str | None:
    if value is None or not value.strip() or value.strip().lower() == _ALL:
        return None
    return value.strip()


def _parse_active_filter(value: str) -> bool | None:
    normalized = value.strip().lower()
    if normalized == _ALL:
        return None
    if normalized in {"true", "false"}:
        return normalized == "true"
    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={"message": "'active' deve ser 'all', 'true' ou 'false'", "field": "active"},
    )


@router.get("/", response_model=UserNotificationPage)
def list_notifications(
    page: int = Query(1),
    limit: int = Query(DEFAULT_PAGE_SIZE),
    include_read: bool = Query(True),
    types: str | None = Query(None, description="Tipos separados por vírgula"),
    priorities: str | None = Query(None, description="Prioridades separadas por vírgula"),
    db: Session = Depends(get_db),
    current_user: UserContext = Depends(get_current_active_user),
) -> UserNotificationPage:
    """Lista as notificações visíveis para o usuário autenticado."""

    options = ListOptions(
        page=page,
        page_size=limit,
        include_read=include_read,
        types=parse_csv(types),
        priorities=parse_csv(priorities),
    )
    try:
        result = list_for_user_uc(
            db, current_user.user_id, options, user=current_user
        )
    except NotificationError as exc:
        raise to_http_exception(exc) from exc
    return UserNotificationPage(
        notifications=[_feed_item_to_schema(item) for item in result.items],
        pagination=result.page_info,
        unread_count=result.unread_count,
    )


@router.get("/unread-count", response_model=UnreadCountRead)
def get_unread_count(
    db: Session = Depends(get_db),
    current_user: UserContext = Depends(get_current_active_user),
) -> UnreadCountRead:
    """Retorna o número de notificações não lidas do usuário."""

    try:
        count = unread_count_uc(db, current_user.user_id, user=current_user)
    except NotificationError as exc:
        raise to_http_exception(exc) from exc
    return UnreadCountRead(unread_count=count)


@router.put("/read-multiple", response_model=MarkReadResponse)
def mark_notifications_read(
    request_in: NotificationMarkReadRequest,
    db: Session = Depends(get_db),
    current_user: UserContext = Depends(get_current_active_user),
) -> MarkReadResponse:
    """Marca várias notificações como lidas de uma só vez."""

    try:
        marked = mark_read_batch_uc(db, request_in.notification_ids, current_user.user_id)
    except NotificationError as exc:
        raise to_http_exception(exc) from exc
    return MarkReadResponse(
        marked=marked, message=f"{marked} notificações marcadas como lidas"
    )


@router.put("/{notification_id}/read", response_model=MarkReadResponse)
def mark_notification_read(
    notification_id: int = Path(..., ge=1, le=MAX_IDENTIFIER),
    db: Session = Depends(get_db),
    current_user: UserContext = Depends(get_current_active_user),
) -> MarkReadResponse:
    """Marca uma notificação como lida; repetir a chamada é seguro."""

    try:
        mark_read_uc(db, notification_id, current_user.user_id)
    except NotificationError as exc:
        raise to_http_exception(exc) from exc
    return MarkReadResponse(marked=1, message="Notificação marcada como lida")


@router.post("/", response_model=NotificationRead, status_code=status.HTTP_201_CREATED)
def create_notification(
    notification_in: NotificationCreate,
    db: Session = Depends(get_db),
    current_user: UserContext = Depends(require_admin),
) -> NotificationRead:
    """Cria uma notificação (apenas administradores)."""

    try:
        notification = create_admin_notification_uc(
            db,
            notification_in.model_dump(),
            created_by=current_user.email or f"user:{current_user.user_id}",
        )
    except NotificationError as exc:
        raise to_http_exception(exc) from exc
    return _notification_to_schema(notification)


@router.delete("/{notification_id}", response_model=NotificationRead)
def deactivate_notification(
    notification_id: int = Path(..., ge=1, le=MAX_IDENTIFIER),
    db: Session = Depends(get_db),
    _: UserContext = Depends(require_admin),
) -> NotificationRead:
    """Desativa a notificação; ela deixa de ser visível imediatamente."""

    try:
        notification = deactivate_notification_uc(db, notification_id)
    except NotificationError as exc:
        raise to_http_exception(exc) from exc
    return _notification_to_schema(notification)


@router.get("/admin/list", response_model=AdminNotificationPage)
def list_all_notifications(
    search: str = Query(""),
    type: str = Query(_ALL),
    priority: str = Query(_ALL),
    active: str = Query(_ALL),
    page: int = Query(1),
    limit: int = Query(DEFAULT_PAGE_SIZE),
    db: Session = Depends(get_db),
    _: UserContext = Depends(require_admin),
) -> AdminNotificationPage:
    """Lista todas as notificações, sem filtro de audiência."""

    window = get_page_window(page, limit)
    filters = NotificationFilters(
        search=search.strip() or None,
        type=_optional_filter(type),
        priority=_optional_filter(priority),
        is_active=_parse_active_filter(active),
    )
    try:
        notifications, total = list_all_notifications_uc(db, filters, window)
    except NotificationError as exc:
        raise to_http_exception(exc) from exc
    return AdminNotificationPage(
        notifications=[_notification_to_schema(n) for n in notifications],
        pagination=build_page_info(total, window),
    )


@router.get("/admin/stats", response_model=NotificationStatsRead)
def get_notification_stats(
    db: Session = Depends(get_db),
    _: UserContext = Depends(require_admin),
) -> NotificationStatsRead:
    """Retorna estatísticas gerais e de leitura por tipo."""

    try:
        stats = aggregate_stats_uc(db)
    except NotificationError as exc:
        raise to_http_exception(exc) from exc
    return NotificationStatsRead(
        overview={
            "total": stats.overview.total,
            "active": stats.overview.active,
            "urgent": stats.overview.urgent,
            "expired": stats.overview.expired,
            "scheduled": stats.overview.scheduled,
        },
        by_type=[
            {
                "type": entry.type.value,
                "sent": entry.sent,
                "read": entry.read,
                "read_percentage": entry.read_percentage,
            }
            for entry in stats.by_type
        ],
    )


@router.get("/admin/{notification_id}", response_model=NotificationRead)
def get_notification(
    notification_id: int = Path(..., ge=1, le=MAX_IDENTIFIER),
    db: Session = Depends(get_db),
    _: UserContext = Depends(require_admin),
) -> NotificationRead:
    """Retorna uma notificação pelo identificador."""

    try:
        notification = get_notification_uc(db, notification_id)
    except NotificationError as exc:
        raise to_http_exception(exc) from exc
    return _notification_to_schema(notification)


@router.post(
    "/webhook",
    response_model=WebhookNotificationAck,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(verify_webhook_token)],
)
def receive_webhook(
    request: Request,
    payload: Any = Body(default=None),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> WebhookNotificationAck:
    """Recebe notificações de sistemas externos."""

    provenance = WebhookProvenance(
        source=settings.webhook_source_tag,
        user_agent=request.headers.get("user-agent"),
        client_ip=request.client.host if request.client else None,
    )
    try:
        notification = ingest_webhook_uc(db, payload, provenance=provenance)
    except NotificationError as exc:
        raise to_http_exception(exc) from exc
    return WebhookNotificationAck(
        id=notification.id or 0,
        title=notification.title,
        type=notification.type.value,
        created_at=notification.created_at,
    )
