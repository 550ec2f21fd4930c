"""Tests for the audience variants and their construction invariants."""

import pytest

from app.domain.entities import (
    AllAudience,
    CompanyAudience,
    RolesAudience,
    UserAudience,
    UserContext,
    build_audience,
)
from app.domain.entities import NotificationPriority
from app.domain.exceptions import ValidationError


@pytest.mark.parametrize(
    ("tag", "kwargs", "expected"),
    [
        ("all", {}, AllAudience()),
        ("ALL", {"company_id": 3}, AllAudience()),
        ("company", {"company_id": 7}, CompanyAudience(7)),
        ("user", {"user_id": 4}, UserAudience(4)),
        ("role", {"roles": ["rh", "ADMINISTRADOR"]}, RolesAudience(frozenset({"RH", "ADMINISTRADOR"}))),
    ],
)
def test_build_audience(tag, kwargs, expected):
    assert build_audience(tag, **kwargs) == expected


@pytest.mark.parametrize(
    ("tag", "kwargs", "field"),
    [
        ("company", {"company_id": None}, "target_company_id"),
        ("company", {"company_id": 0}, "target_company_id"),
        ("company", {"company_id": 2**31}, "target_company_id"),
        ("user", {"user_id": 10**20}, "target_user_id"),
        ("user", {}, "target_user_id"),
        ("role", {"roles": []}, "target_roles"),
        ("role", {"roles": None}, "target_roles"),
        ("role", {"roles": ["  "]}, "target_roles"),
        ("everyone", {}, "target_audience"),
        (None, {}, "target_audience"),
    ],
)
def test_build_audience_rejects_missing_payload(tag, kwargs, field):
    with pytest.raises(ValidationError) as exc_info:
        build_audience(tag, **kwargs)

    assert exc_info.value.field == field


def test_company_audience_cannot_be_built_without_identifier():
    with pytest.raises(ValidationError):
        CompanyAudience(None)


def test_roles_are_normalised_to_upper_case():
    audience = RolesAudience(["rh", " funcionario "])

    assert audience.roles == frozenset({"RH", "FUNCIONARIO"})


def test_priority_rank_orders_urgent_first():
    ranked = sorted(NotificationPriority, key=lambda priority: priority.rank, reverse=True)

    assert [priority.value for priority in ranked] == ["urgent", "high", "normal", "low"]


def test_user_context_admin_check():
    assert UserContext(user_id=1, company_id=1, role="administrador").is_admin()
    assert not UserContext(user_id=2, company_id=1, role="RH").is_admin()
