"""HTTP tests for the notification endpoints."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from app.config import Settings, get_settings
from app.infrastructure.security import create_user_token


def _headers(user) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_user_token(user.user_id)}"}


@pytest.fixture()
def app(session):
    from main import create_app

    application = create_app()
    yield application
    application.dependency_overrides.clear()


@pytest.fixture()
def client(app):
    with TestClient(app) as test_client:
        yield test_client


def _create(client, admin, **overrides):
    payload = {"title": "Manutenção", "message": "Sistema fora do ar às 22h"}
    payload.update(overrides)
    response = client.post("/notifications/", json=payload, headers=_headers(admin))
    assert response.status_code == 201, response.text
    return response.json()


def test_admin_creates_and_employee_lists(client, users):
    created = _create(client, users["admin"], priority="high", type="maintenance")
    assert created["created_by"] == users["admin"].email
    assert created["target_audience"] == "all"
    assert created["is_active"] is True

    response = client.get("/notifications/", headers=_headers(users["employee"]))

    assert response.status_code == 200
    body = response.json()
    assert body["unread_count"] == 1
    assert body["pagination"]["total_items"] == 1
    assert body["notifications"][0]["id"] == created["id"]
    assert body["notifications"][0]["is_read"] is False


def test_non_admin_cannot_create(client, users):
    response = client.post(
        "/notifications/",
        json={"title": "x", "message": "y"},
        headers=_headers(users["hr"]),
    )

    assert response.status_code == 403


def test_missing_token_is_rejected(client, users):
    assert client.get("/notifications/").status_code == 401


def test_invalid_audience_payload_is_a_bad_request(client, users):
    response = client.post(
        "/notifications/",
        json={"title": "x", "message": "y", "target_audience": "company", "target_company_id": None},
        headers=_headers(users["admin"]),
    )

    assert response.status_code == 400
    assert response.json()["detail"]["field"] == "target_company_id"


def test_company_notification_reaches_only_that_company(client, users):
    _create(client, users["admin"], target_audience="company", target_company_id=7)

    own = client.get("/notifications/", headers=_headers(users["employee"])).json()
    other = client.get("/notifications/", headers=_headers(users["other_employee"])).json()

    assert own["notifications"] == []
    assert len(other["notifications"]) == 1


def test_mark_read_endpoints_are_idempotent(client, users):
    first = _create(client, users["admin"], title="Primeira")
    second = _create(client, users["admin"], title="Segunda")
    headers = _headers(users["employee"])

    for _ in range(2):
        response = client.put(f"/notifications/{first['id']}/read", headers=headers)
        assert response.status_code == 200
    assert client.get("/notifications/unread-count", headers=headers).json() == {
        "unread_count": 1
    }

    response = client.put(
        "/notifications/read-multiple",
        json={"notification_ids": [first["id"], second["id"], second["id"]]},
        headers=headers,
    )
    assert response.status_code == 200
    assert response.json()["marked"] == 2
    assert client.get("/notifications/unread-count", headers=headers).json() == {
        "unread_count": 0
    }


def test_mark_read_unknown_notification_succeeds(client, users):
    response = client.put("/notifications/99999/read", headers=_headers(users["employee"]))

    assert response.status_code == 200


def test_read_multiple_requires_ids(client, users):
    response = client.put(
        "/notifications/read-multiple",
        json={"notification_ids": []},
        headers=_headers(users["employee"]),
    )

    assert response.status_code == 422


def test_include_read_false_hides_read_items(client, users):
    read = _create(client, users["admin"], title="Lida")
    _create(client, users["admin"], title="Pendente")
    headers = _headers(users["employee"])
    client.put(f"/notifications/{read['id']}/read", headers=headers)

    body = client.get(
        "/notifications/", params={"include_read": "false"}, headers=headers
    ).json()

    assert [item["title"] for item in body["notifications"]] == ["Pendente"]
    assert body["unread_count"] == 1


def test_filters_by_comma_separated_types(client, users):
    _create(client, users["admin"], title="Novidade", type="feature")
    _create(client, users["admin"], title="Erro", type="error")
    _create(client, users["admin"], title="Info", type="info")

    body = client.get(
        "/notifications/",
        params={"types": "feature,error"},
        headers=_headers(users["employee"]),
    ).json()

    assert sorted(item["title"] for item in body["notifications"]) == ["Erro", "Novidade"]


def test_deactivate_hides_notification_immediately(client, users):
    created = _create(client, users["admin"])
    employee_headers = _headers(users["employee"])
    assert client.get("/notifications/", headers=employee_headers).json()["unread_count"] == 1

    response = client.delete(f"/notifications/{created['id']}", headers=_headers(users["admin"]))
    assert response.status_code == 200
    assert response.json()["is_active"] is False

    again = client.delete(f"/notifications/{created['id']}", headers=_headers(users["admin"]))
    assert again.status_code == 200

    body = client.get("/notifications/", headers=employee_headers).json()
    assert body["notifications"] == []
    assert body["unread_count"] == 0


def test_deactivate_missing_notification_returns_404(client, users):
    response = client.delete("/notifications/4040", headers=_headers(users["admin"]))

    assert response.status_code == 404


def test_admin_list_and_detail(client, users):
    kept = _create(client, users["admin"], title="Folha liberada", type="success")
    retired = _create(client, users["admin"], title="Aviso antigo")
    admin_headers = _headers(users["admin"])
    client.delete(f"/notifications/{retired['id']}", headers=admin_headers)

    body = client.get(
        "/notifications/admin/list",
        params={"active": "true", "search": "folha"},
        headers=admin_headers,
    ).json()
    assert [item["id"] for item in body["notifications"]] == [kept["id"]]
    assert body["pagination"]["total_items"] == 1

    detail = client.get(f"/notifications/admin/{retired['id']}", headers=admin_headers)
    assert detail.status_code == 200
    assert detail.json()["is_active"] is False

    assert client.get("/notifications/admin/777", headers=admin_headers).status_code == 404
    assert (
        client.get("/notifications/admin/list", headers=_headers(users["employee"])).status_code
        == 403
    )


def test_admin_stats(client, users):
    created = _create(client, users["admin"], type="warning", priority="urgent")
    client.put(f"/notifications/{created['id']}/read", headers=_headers(users["employee"]))

    response = client.get("/notifications/admin/stats", headers=_headers(users["admin"]))

    assert response.status_code == 200
    body = response.json()
    assert body["overview"]["total"] == 1
    assert body["overview"]["urgent"] == 1
    assert body["by_type"] == [
        {"type": "warning", "sent": 1, "read": 1, "read_percentage": 100.0}
    ]


def test_webhook_exposes_only_public_fields(client, users):
    response = client.post(
        "/notifications/webhook",
        json={"title": "x", "message": "y", "target": "all"},
        headers={"User-Agent": "monitoring-bot/2.1"},
    )

    assert response.status_code == 201
    body = response.json()
    assert set(body) == {"id", "title", "type", "created_at"}

    detail = client.get(
        f"/notifications/admin/{body['id']}", headers=_headers(users["admin"])
    ).json()
    assert detail["target_audience"] == "all"
    assert detail["created_by"] == "external_webhook"
    assert detail["metadata"]["source"] == "external_webhook"
    assert detail["metadata"]["webhook_source"] == "monitoring-bot/2.1"
    assert "webhook_received_at" in detail["metadata"]


def test_webhook_validation_names_the_field(client, users):
    response = client.post("/notifications/webhook", json={"message": "y"})

    assert response.status_code == 400
    assert response.json()["detail"]["field"] == "title"


def test_webhook_shared_secret(app, client, users):
    app.dependency_overrides[get_settings] = lambda: Settings(
        notification_webhook_token="s3cret"
    )
    payload = {"title": "x", "message": "y"}

    denied = client.post("/notifications/webhook", json=payload)
    wrong = client.post(
        "/notifications/webhook", json=payload, headers={"X-Webhook-Token": "nope"}
    )
    accepted = client.post(
        "/notifications/webhook", json=payload, headers={"X-Webhook-Token": "s3cret"}
    )

    assert denied.status_code == 401
    assert wrong.status_code == 401
    assert accepted.status_code == 201


def test_health(client):
    response = client.get("/health/")

    assert response.status_code == 200
    assert response.json()["database"] == "connected"


@pytest.mark.parametrize(
    ("payload", "field"),
    [
        ({"title": "x", "message": "y", "expires_at": "9999-12-31T23:59:59-12:00"}, "expires_at"),
        (
            {"title": "x", "message": "y", "target": "company", "target_company_id": 10**20},
            "target_company_id",
        ),
    ],
)
def test_webhook_out_of_range_values_are_bad_requests(client, users, payload, field):
    response = client.post("/notifications/webhook", json=payload)

    assert response.status_code == 400
    assert response.json()["detail"]["field"] == field


def test_mark_read_rejects_ids_beyond_the_column_range(client, users):
    headers = _headers(users["employee"])

    single = client.put("/notifications/100000000000000000000/read", headers=headers)
    batch = client.put(
        "/notifications/read-multiple",
        json={"notification_ids": [1, 10**20]},
        headers=headers,
    )
    zero = client.put("/notifications/0/read", headers=headers)

    assert single.status_code == 422
    assert batch.status_code == 422
    assert zero.status_code == 422
    assert client.get("/notifications/unread-count", headers=headers).status_code == 200


def test_admin_routes_reject_ids_beyond_the_column_range(client, users):
    headers = _headers(users["admin"])

    assert client.delete("/notifications/100000000000000000000", headers=headers).status_code == 422
    assert (
        client.get("/notifications/admin/100000000000000000000", headers=headers).status_code
        == 422
    )
