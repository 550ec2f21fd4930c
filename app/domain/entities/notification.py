"""Domain entities describing broadcast notifications and their audience."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Union

from app.domain.exceptions import ValidationError

ROLE_ADMIN = "ADMINISTRADOR"
ROLE_HR = "RH"
ROLE_EMPLOYEE = "FUNCIONARIO"

AUDIENCE_ALL = "all"
AUDIENCE_COMPANY = "company"
AUDIENCE_USER = "user"
AUDIENCE_ROLE = "role"
AUDIENCE_TAGS = (AUDIENCE_ALL, AUDIENCE_COMPANY, AUDIENCE_USER, AUDIENCE_ROLE)

# Largest value an Integer id column holds.
MAX_IDENTIFIER = 2**31 - 1


class NotificationType(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    SUCCESS = "success"
    MAINTENANCE = "maintenance"
    FEATURE = "feature"
    UPDATE = "update"


class NotificationPriority(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"

    @property
    def rank(self) -> int:
        """Ordering weight; higher ranks are listed first."""

        return _PRIORITY_RANKS[self]


_PRIORITY_RANKS = {
    NotificationPriority.LOW: 0,
    NotificationPriority.NORMAL: 1,
    NotificationPriority.HIGH: 2,
    NotificationPriority.URGENT: 3,
}


def _require_identifier(value: Any, *, field_name: str, tag: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValidationError(
            f"'{field_name}' é obrigatório para audiência \"{tag}\"",
            field=field_name,
        )
    if value > MAX_IDENTIFIER:
        raise ValidationError(
            f"'{field_name}' deve ser no máximo {MAX_IDENTIFIER}", field=field_name
        )
    return value


@dataclass(frozen=True)
class AllAudience:
    """Every user of every company."""

    tag: str = field(default=AUDIENCE_ALL, init=False)


@dataclass(frozen=True)
class CompanyAudience:
    """Every user belonging to one company."""

    company_id: int
    tag: str = field(default=AUDIENCE_COMPANY, init=False)

    def __post_init__(self) -> None:
        _require_identifier(self.company_id, field_name="target_company_id", tag=self.tag)


@dataclass(frozen=True)
class UserAudience:
    """One specific user."""

    user_id: int
    tag: str = field(default=AUDIENCE_USER, init=False)

    def __post_init__(self) -> None:
        _require_identifier(self.user_id, field_name="target_user_id", tag=self.tag)


@dataclass(frozen=True)
class RolesAudience:
    """Every user holding one of ``roles``."""

    roles: frozenset[str]
    tag: str = field(default=AUDIENCE_ROLE, init=False)

    def __post_init__(self) -> None:
        if isinstance(self.roles, (str, bytes)) or not isinstance(self.roles, Iterable):
            raise ValidationError(
                "'target_roles' deve ser uma lista de perfis", field="target_roles"
            )
        normalized = frozenset(
            str(role).strip().upper() for role in self.roles if str(role).strip()
        )
        if not normalized:
            raise ValidationError(
                "'target_roles' é obrigatório para audiência \"role\"",
                field="target_roles",
            )
        object.__setattr__(self, "roles", normalized)


Audience = Union[AllAudience, CompanyAudience, UserAudience, RolesAudience]


def build_audience(
    tag: Any,
    *,
    company_id: Any = None,
    user_id: Any = None,
    roles: Any = None,
) -> Audience:
    """Build the audience variant named by ``tag`` from its loose payload fields."""

    normalized = str(tag).strip().lower() if tag is not None else ""
    if normalized == AUDIENCE_ALL:
        return AllAudience()
    if normalized == AUDIENCE_COMPANY:
        return CompanyAudience(company_id)
    if normalized == AUDIENCE_USER:
        return UserAudience(user_id)
    if normalized == AUDIENCE_ROLE:
        return RolesAudience(frozenset(roles) if _is_collection(roles) else roles)
    raise ValidationError(
        f"Audiência alvo inválida: '{tag}'. Valores aceitos: {', '.join(AUDIENCE_TAGS)}",
        field="target_audience",
    )


def _is_collection(value: Any) -> bool:
    return isinstance(value, Iterable) and not isinstance(value, (str, bytes, dict))


@dataclass
class NotificationSpec:
    """Creation contract accepted by the notification store.

    Values are kept as received; the store validates and converts them.
    """

    title: Any
    message: Any
    type: Any = NotificationType.INFO.value
    priority: Any = NotificationPriority.NORMAL.value
    target_audience: Any = AUDIENCE_ALL
    target_company_id: Any = None
    target_user_id: Any = None
    target_roles: Any = None
    schedule_for: datetime | None = None
    expires_at: datetime | None = None
    metadata: Any = field(default_factory=dict)
    created_by: str = "system"


@dataclass
class Notification:
    """Message broadcast to the audience it targets."""

    id: int | None
    title: str
    message: str
    type: NotificationType
    priority: NotificationPriority
    audience: Audience
    is_active: bool = True
    schedule_for: datetime | None = None
    expires_at: datetime | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    created_by: str = "system"
    created_at: datetime | None = None
    updated_at: datetime | None = None


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
    "RolesAudience",
    "UserAudience",
    "build_audience",
]
