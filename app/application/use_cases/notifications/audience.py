"""Visibility rules deciding which users can see a notification."""

from __future__ import annotations

from datetime import datetime

from app.domain.entities import (
    AllAudience,
    Audience,
    CompanyAudience,
    Notification,
    RolesAudience,
    UserAudience,
    UserContext,
)


def audience_matches(audience: Audience, user: UserContext) -> bool:
    """Return ``True`` when ``user`` belongs to ``audience``."""

    if isinstance(audience, AllAudience):
        return True
    if isinstance(audience, CompanyAudience):
        return user.company_id is not None and audience.company_id == user.company_id
    if isinstance(audience, UserAudience):
        return audience.user_id == user.user_id
    if isinstance(audience, RolesAudience):
        return (user.role or "").upper() in audience.roles
    return False


def is_expired(notification: Notification, now: datetime) -> bool:
    return notification.expires_at is not None and now >= notification.expires_at


def is_scheduled(notification: Notification, now: datetime) -> bool:
    """``True`` while the notification waits for its ``schedule_for`` instant."""

    return notification.schedule_for is not None and now < notification.schedule_for


def is_visible(notification: Notification, user: UserContext, now: datetime) -> bool:
    """Combine the active flag, the time window and the audience match.

    ``now`` must be the same instant for every row evaluated in one query.
    """

    if not notification.is_active:
        return False
    if is_expired(notification, now) or is_scheduled(notification, now):
        return False
    return audience_matches(notification.audience, user)


__all__ = ["audience_matches", "is_expired", "is_scheduled", "is_visible"]
