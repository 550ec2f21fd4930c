"""Tests for creating, fetching, listing and deactivating notifications."""

from datetime import timedelta

import pytest

from app.application.use_cases.notifications import (
    NotificationFilters,
    create_notification,
    deactivate_notification,
    get_notification,
    list_all_notifications,
    list_for_user,
)
from app.domain.entities import CompanyAudience, NotificationPriority, NotificationType
from app.domain.exceptions import NotFoundError, ValidationError
from app.infrastructure.models import NotificationModel
from app.utils import get_page_window, now_in_app_timezone


def test_create_assigns_identity_and_timestamps(session, make_spec):
    notification = create_notification(
        session, make_spec(type="warning", priority="HIGH", metadata={"ticket": "OPS-1"})
    )

    assert notification.id is not None
    assert notification.type is NotificationType.WARNING
    assert notification.priority is NotificationPriority.HIGH
    assert notification.is_active is True
    assert notification.metadata == {"ticket": "OPS-1"}
    assert notification.created_at is not None
    assert notification.updated_at == notification.created_at


@pytest.mark.parametrize(
    ("overrides", "field"),
    [
        ({"title": ""}, "title"),
        ({"message": None}, "message"),
        ({"type": "urgent"}, "type"),
        ({"priority": "critical"}, "priority"),
        ({"target_audience": "team"}, "target_audience"),
        ({"target_audience": "company", "target_company_id": None}, "target_company_id"),
        ({"target_audience": "user"}, "target_user_id"),
        ({"target_audience": "role", "target_roles": []}, "target_roles"),
        ({"metadata": ["not", "a", "map"]}, "metadata"),
    ],
)
def test_create_rejects_invalid_specs_without_persisting(session, make_spec, overrides, field):
    with pytest.raises(ValidationError) as exc_info:
        create_notification(session, make_spec(**overrides))

    assert exc_info.value.field == field
    assert session.query(NotificationModel).count() == 0


def test_create_rejects_expiry_before_schedule(session, make_spec):
    start = now_in_app_timezone()

    with pytest.raises(ValidationError) as exc_info:
        create_notification(
            session, make_spec(schedule_for=start, expires_at=start - timedelta(hours=1))
        )

    assert exc_info.value.field == "expires_at"


def test_company_notification_visible_only_to_that_company(session, users, make_spec):
    notification = create_notification(
        session, make_spec(target_audience="company", target_company_id=7)
    )

    assert notification.audience == CompanyAudience(7)
    other_feed = list_for_user(session, users["other_employee"].user_id)
    own_feed = list_for_user(session, users["employee"].user_id)
    assert [item.notification.id for item in other_feed.items] == [notification.id]
    assert own_feed.items == []


def test_get_notification_raises_when_missing(session):
    with pytest.raises(NotFoundError):
        get_notification(session, 999)


def test_deactivate_is_idempotent_and_refreshes_updated_at(session, make_spec):
    created = create_notification(session, make_spec())

    first = deactivate_notification(session, created.id)
    second = deactivate_notification(session, created.id)

    assert first.is_active is False
    assert second.is_active is False
    assert first.updated_at >= created.updated_at
    assert get_notification(session, created.id).is_active is False


def test_deactivate_missing_notification_raises(session):
    with pytest.raises(NotFoundError):
        deactivate_notification(session, 12345)


def test_deactivation_is_visible_to_the_next_check(session, users, make_spec):
    created = create_notification(session, make_spec())
    employee_id = users["employee"].user_id
    assert len(list_for_user(session, employee_id).items) == 1

    deactivate_notification(session, created.id)

    assert list_for_user(session, employee_id).items == []


def test_list_all_filters_and_pages(session, make_spec):
    create_notification(session, make_spec(title="Folha de pagamento liberada", type="success"))
    create_notification(session, make_spec(title="Nova funcionalidade", type="feature"))
    inactive = create_notification(
        session, make_spec(title="Aviso antigo", message="folha anterior", priority="low")
    )
    deactivate_notification(session, inactive.id)

    items, total = list_all_notifications(
        session, NotificationFilters(search="FOLHA"), get_page_window(1, 10)
    )
    assert total == 2
    assert {item.title for item in items} == {"Folha de pagamento liberada", "Aviso antigo"}

    items, total = list_all_notifications(
        session, NotificationFilters(is_active=False), get_page_window(1, 10)
    )
    assert [item.id for item in items] == [inactive.id]

    items, total = list_all_notifications(
        session, NotificationFilters(type="feature"), get_page_window(1, 10)
    )
    assert total == 1 and items[0].type is NotificationType.FEATURE

    items, total = list_all_notifications(session, NotificationFilters(), get_page_window(2, 2))
    assert total == 3
    assert len(items) == 1


def test_list_all_rejects_unknown_type_filter(session):
    with pytest.raises(ValidationError):
        list_all_notifications(
            session, NotificationFilters(type="bogus"), get_page_window(1, 10)
        )
