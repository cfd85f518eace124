"""Unit tests for the pure scheduling and preference helpers."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from app.application.use_cases.notifications import (
    determine_scheduled_for,
    initial_delivery_status,
    reminder_lead_seconds,
    should_deliver,
    truncate_message,
)
from app.domain.entities import NotificationType, UserPreferences
from app.utils import combine_local_date_time


def test_explicit_schedule_wins_over_type_delay(now) -> None:
    config = NotificationType(key="system_alert", default_delay_seconds=600)
    requested = now + timedelta(days=2)

    assert determine_scheduled_for(requested, config, now=now) == requested


def test_explicit_iso_string_is_normalized_to_utc(now) -> None:
    result = determine_scheduled_for("2025-06-01T12:00:00+02:00", None, now=now)

    assert result == datetime(2025, 6, 1, 10, 0, tzinfo=timezone.utc)


def test_naive_explicit_schedule_is_read_as_utc(now) -> None:
    result = determine_scheduled_for(datetime(2025, 6, 1, 10, 0), None, now=now)

    assert result == datetime(2025, 6, 1, 10, 0, tzinfo=timezone.utc)


def test_invalid_explicit_schedule_raises(now) -> None:
    with pytest.raises(ValueError):
        determine_scheduled_for("tomorrow-ish", None, now=now)


@pytest.mark.parametrize("delay", [0, -5])
def test_non_positive_delay_means_no_schedule(now, delay: int) -> None:
    config = NotificationType(key="system_alert", default_delay_seconds=delay)

    assert determine_scheduled_for(None, config, now=now) is None


def test_missing_config_means_no_schedule(now) -> None:
    assert determine_scheduled_for(None, None, now=now) is None


def test_positive_delay_is_added_to_now(now) -> None:
    config = NotificationType(key="system_alert", default_delay_seconds=3600)

    assert determine_scheduled_for(None, config, now=now) == now + timedelta(hours=1)


@pytest.mark.parametrize(
    ("deliverable", "offset", "expected"),
    [
        (False, timedelta(hours=1), "cancelled"),
        (True, timedelta(hours=1), "scheduled"),
        (True, timedelta(0), "pending"),
        (True, -timedelta(minutes=1), "pending"),
        (True, None, "pending"),
    ],
)
def test_initial_delivery_status(now, deliverable, offset, expected) -> None:
    scheduled_for = now + offset if offset is not None else None

    status = initial_delivery_status(
        deliverable=deliverable, scheduled_for=scheduled_for, now=now
    )

    assert status == expected


@pytest.mark.parametrize(
    ("type_key", "preferences", "expected"),
    [
        ("message_received", {"patientMessages": False}, False),
        ("message_received", {"patientMessages": True}, True),
        ("message_received", {}, True),
        ("message_received", {"patientMessages": "false"}, True),
        ("session_reminder", {"sessionReminders": False}, False),
        ("patient_assignment", {"systemAlerts": False}, False),
        ("custom_type", {"patientMessages": False}, True),
        (None, {"patientMessages": False}, True),
    ],
)
def test_should_deliver(type_key, preferences, expected) -> None:
    result = should_deliver(type_key, UserPreferences(notification_preferences=preferences))

    assert result is expected


@pytest.mark.parametrize(
    ("support_preferences", "expected"),
    [
        ({"reminderLeadTime": 30}, 1800),
        ({"reminderLeadTime": "45"}, 2700),
        ({"reminderLeadTime": 1.5}, 90),
        ({"reminderLeadTime": 0}, 3600),
        ({"reminderLeadTime": -10}, 3600),
        ({"reminderLeadTime": "soon"}, 3600),
        ({"reminderLeadTime": True}, 3600),
        ({"reminderLeadTime": None}, 3600),
        ({}, 3600),
        (None, 3600),
    ],
)
def test_reminder_lead_seconds(support_preferences, expected: int) -> None:
    assert reminder_lead_seconds(support_preferences, 3600) == expected


def test_truncate_message_keeps_short_text() -> None:
    text = "x" * 140

    assert truncate_message(text) == text


def test_truncate_message_adds_ellipsis() -> None:
    result = truncate_message("y" * 141)

    assert len(result) == 140
    assert result.endswith("...")
    assert result[:137] == "y" * 137


@pytest.mark.parametrize(
    ("date_text", "time_text", "expected"),
    [
        ("2025-06-01", "10:00", datetime(2025, 6, 1, 10, 0, tzinfo=timezone.utc)),
        ("2025-06-01", "10:00:30", datetime(2025, 6, 1, 10, 0, 30, tzinfo=timezone.utc)),
        ("2025-06-01", "25:00", None),
        ("2025-13-01", "10:00", None),
        ("", "10:00", None),
        ("2025-06-01", None, None),
    ],
)
def test_combine_local_date_time(date_text, time_text, expected) -> None:
    assert combine_local_date_time(date_text, time_text) == expected
