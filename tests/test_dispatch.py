"""Tests for the due-notification dispatch sweep."""

from __future__ import annotations

from datetime import timedelta

from sqlalchemy.exc import OperationalError

from app.application.use_cases.notifications import dispatch_due_notifications, enqueue
from app.infrastructure.repositories import NotificationRepository


def _create(db, type_cache, now, user_id: str, **options):
    return enqueue(
        db,
        user_id=user_id,
        type_key="system_alert",
        title="Heads up",
        message="Something happened.",
        cache=type_cache,
        now=now,
        **options,
    ).notification


def test_only_due_notifications_are_promoted(db, type_cache, now) -> None:
    past = _create(db, type_cache, now - timedelta(hours=2), "user-1", scheduled_for=now - timedelta(hours=1))
    future = _create(db, type_cache, now, "user-2", scheduled_for=now + timedelta(hours=1))
    assert past.delivery_status == "scheduled"
    assert future.delivery_status == "scheduled"

    dispatched = dispatch_due_notifications(db, 100, now=now)

    repository = NotificationRepository(db)
    assert dispatched == 1
    promoted = repository.get(past.id)
    assert promoted.delivery_status == "sent"
    assert promoted.delivered_at == now
    untouched = repository.get(future.id)
    assert untouched.delivery_status == "scheduled"
    assert untouched.delivered_at is None


def test_unscheduled_pending_notifications_are_due(db, type_cache, now) -> None:
    pending = _create(db, type_cache, now, "user-1")
    assert pending.scheduled_for is None

    assert dispatch_due_notifications(db, 10, now=now) == 1
    assert NotificationRepository(db).get(pending.id).delivery_status == "sent"


def test_cancelled_and_sent_notifications_are_skipped(
    db, type_cache, now, add_profile
) -> None:
    add_profile("user-1", notification_preferences={"systemAlerts": False})
    cancelled = _create(db, type_cache, now, "user-1")
    assert cancelled.delivery_status == "cancelled"
    _create(db, type_cache, now, "user-2")

    assert dispatch_due_notifications(db, 10, now=now) == 1
    assert dispatch_due_notifications(db, 10, now=now + timedelta(minutes=1)) == 0
    assert NotificationRepository(db).get(cancelled.id).delivery_status == "cancelled"


def test_limit_bounds_each_sweep(db, type_cache, now) -> None:
    for index in range(3):
        _create(db, type_cache, now, f"user-{index}")

    assert dispatch_due_notifications(db, 2, now=now) == 2
    assert dispatch_due_notifications(db, 2, now=now) == 1
    assert dispatch_due_notifications(db, 2, now=now) == 0


def test_non_positive_limit_dispatches_nothing(db, type_cache, now) -> None:
    _create(db, type_cache, now, "user-1")

    assert dispatch_due_notifications(db, 0, now=now) == 0


def test_default_limit_comes_from_settings(db, type_cache, now) -> None:
    _create(db, type_cache, now, "user-1")

    assert dispatch_due_notifications(db, now=now) == 1


def test_query_failure_returns_zero(db, type_cache, now, monkeypatch, caplog) -> None:
    _create(db, type_cache, now, "user-1")

    def _fail(self, **kwargs):
        raise OperationalError("SELECT", {}, Exception("timeout"))

    monkeypatch.setattr(NotificationRepository, "list_due_ids", _fail)

    with caplog.at_level("ERROR"):
        assert dispatch_due_notifications(db, 10, now=now) == 0
    assert "Failed to query pending notifications" in caplog.text


def test_update_failure_returns_zero(db, type_cache, now, monkeypatch, caplog) -> None:
    _create(db, type_cache, now, "user-1")

    def _fail(self, ids, **kwargs):
        raise OperationalError("UPDATE", {}, Exception("locked"))

    monkeypatch.setattr(NotificationRepository, "mark_as_sent", _fail)

    with caplog.at_level("ERROR"):
        assert dispatch_due_notifications(db, 10, now=now) == 0
    assert "Failed to mark" in caplog.text
