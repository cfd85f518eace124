"""Helpers for working with timezone-aware datetimes."""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Final

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from app.config import get_settings

_DEFAULT_TIMEZONE: Final[str] = "UTC"
_OFFSET_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?:UTC|GMT)(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Return the configured application timezone.

    The timezone is resolved using the ``APP_TIMEZONE`` environment variable (via
    the ``Settings`` object). Session dates and times are stored without an
    offset and are interpreted in this timezone. If the provided value cannot
    be resolved, UTC is used as a fallback.
    """

    settings = get_settings()
    tz_name = (settings.app_timezone or "").strip() or _DEFAULT_TIMEZONE
    return _resolve_timezone(tz_name)


def now_utc() -> datetime:
    """Return the current time as an aware UTC datetime."""

    return datetime.now(tz=timezone.utc)


def ensure_utc(value: datetime | None) -> datetime | None:
    """Normalize ``value`` to an aware UTC datetime; naive values are read as UTC."""

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def ensure_naive_utc(value: datetime | None) -> datetime | None:
    """Return ``value`` expressed in UTC but without ``tzinfo``.

    Columns are declared as plain ``DateTime`` so that SQLite and PostgreSQL
    behave the same; the domain layer keeps working with aware datetimes.
    """

    normalized = ensure_utc(value)
    if normalized is None:
        return None
    return normalized.replace(tzinfo=None)


def parse_datetime(value: datetime | str) -> datetime:
    """Return an aware UTC datetime for a ``datetime`` or ISO-8601 string.

    Raises ``ValueError`` when the string cannot be parsed.
    """

    if isinstance(value, datetime):
        return ensure_utc(value)
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = f"{text[:-1]}+00:00"
    return ensure_utc(datetime.fromisoformat(text))


def combine_local_date_time(date_text: str | None, time_text: str | None) -> datetime | None:
    """Combine ``YYYY-MM-DD`` and ``HH:MM[:SS]`` strings in the app timezone.

    Returns the instant in UTC, or ``None`` when either part is missing or
    malformed.
    """

    if not date_text or not time_text:
        return None
    try:
        day = date.fromisoformat(str(date_text).strip())
        moment = time.fromisoformat(str(time_text).strip())
    except ValueError:
        return None
    if moment.tzinfo is not None:
        local = datetime.combine(day, moment)
    else:
        local = datetime.combine(day, moment, tzinfo=get_app_timezone())
    return local.astimezone(timezone.utc)


def _resolve_timezone(tz_name: str) -> tzinfo:
    """Resolve ``tz_name`` into a ``timezone`` instance."""

    try:
        return ZoneInfo(tz_name)
    except ZoneInfoNotFoundError:
        match = _OFFSET_PATTERN.match(tz_name)
        if match:
            sign = -1 if match.group("sign") == "-" else 1
            hours = int(match.group("hours"))
            minutes = int(match.group("minutes") or 0)
            offset = timedelta(hours=hours, minutes=minutes)
            return timezone(sign * offset)
    return timezone.utc
