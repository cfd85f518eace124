"""API tests for the notification event and dispatch endpoints."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from app.config import Settings, get_settings
from app.domain.entities import NotificationType
from app.infrastructure.database import get_db, get_session_factory
from app.interfaces.api.dependencies import get_type_cache


def _build_client(session_factory, type_cache, *, token: str | None = None) -> TestClient:
    from main import create_app

    app = create_app()

    def _override_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_type_cache] = lambda: type_cache
    app.dependency_overrides[get_settings] = lambda: Settings(
        database_url="sqlite://", notification_api_token=token
    )
    return TestClient(app)


@pytest.fixture()
def client(session_factory, type_cache) -> TestClient:
    return _build_client(session_factory, type_cache)


def test_session_event_reconciles_reminders(
    client: TestClient, add_session, user_notifications
) -> None:
    add_session("s1", date="2099-01-01", time="10:00")

    response = client.post("/notifications/events/session", json={"sessionId": "s1"})

    assert response.status_code == 202
    assert response.json() == {"success": True}
    for user_id in ("patient-1", "counselor-1"):
        reminders = user_notifications(user_id)
        assert len(reminders) == 1
        assert reminders[0].delivery_status == "scheduled"
        assert reminders[0].metadata["sessionId"] == "s1"


def test_message_event_requires_message_id(client: TestClient) -> None:
    response = client.post("/notifications/events/message", json={})

    assert response.status_code == 422


def test_message_event_for_unknown_message_is_still_accepted(client: TestClient) -> None:
    response = client.post("/notifications/events/message", json={"messageId": "missing"})

    assert response.status_code == 202


def test_patient_assignment_event_notifies_both_sides(
    client: TestClient, user_notifications
) -> None:
    response = client.post(
        "/notifications/events/patient-assignment",
        json={"patientId": "patient-1", "counselorId": "counselor-1", "assignedBy": "admin"},
    )

    assert response.status_code == 202
    assert user_notifications("counselor-1")[0].priority == "high"
    assert user_notifications("patient-1")[0].priority == "normal"


def test_dispatch_reports_sent_notifications(client: TestClient, db) -> None:
    from app.application.use_cases.notifications import enqueue

    enqueue(db, user_id="user-1", type_key="system_alert", title="Hi", message="There")

    response = client.post("/notifications/dispatch")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["seeded"] == 0
    assert body["dispatched"] == 1
    assert body["timestamp"]


def test_token_is_enforced_when_configured(session_factory, type_cache, add_session) -> None:
    add_session("s1", date="2099-01-01", time="10:00")
    client = _build_client(session_factory, type_cache, token="s3cret")

    missing = client.post("/notifications/events/session", json={"sessionId": "s1"})
    wrong = client.post(
        "/notifications/events/session",
        json={"sessionId": "s1"},
        headers={"X-Notification-Token": "nope"},
    )
    accepted = client.post(
        "/notifications/events/session",
        json={"sessionId": "s1"},
        headers={"X-Notification-Token": "s3cret"},
    )

    assert missing.status_code == 401
    assert missing.json()["detail"] == "Invalid notification token"
    assert wrong.status_code == 401
    assert accepted.status_code == 202


def test_type_cache_invalidation(client: TestClient, type_cache) -> None:
    for key in ("system_alert", "session_reminder"):
        type_cache.set(NotificationType(key=key, name=key))

    single = client.post("/notifications/types/cache/invalidate", json={"key": "system_alert"})
    assert single.status_code == 204
    assert "system_alert" not in type_cache
    assert "session_reminder" in type_cache

    everything = client.post("/notifications/types/cache/invalidate")
    assert everything.status_code == 204
    assert len(type_cache) == 0
