"""Tests for settings reloading."""

from __future__ import annotations

from datetime import datetime, timezone

from app.config import get_settings, reset_settings_cache
from app.utils import combine_local_date_time


def test_reset_reloads_the_application_timezone(monkeypatch) -> None:
    utc_start = datetime(2025, 6, 1, 10, 0, tzinfo=timezone.utc)
    assert combine_local_date_time("2025-06-01", "10:00") == utc_start

    monkeypatch.setenv("APP_TIMEZONE", "UTC+02:00")
    try:
        reset_settings_cache()

        assert get_settings().app_timezone == "UTC+02:00"
        assert combine_local_date_time("2025-06-01", "10:00") == datetime(
            2025, 6, 1, 8, 0, tzinfo=timezone.utc
        )
    finally:
        monkeypatch.undo()
        reset_settings_cache()

    assert combine_local_date_time("2025-06-01", "10:00") == utc_start
