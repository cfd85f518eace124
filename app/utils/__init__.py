"""Utility helpers for reusable functionality."""

from .datetime import (
    combine_local_date_time,
    ensure_naive_utc,
    ensure_utc,
    get_app_timezone,
    now_utc,
    parse_datetime,
)

__all__ = [
    "combine_local_date_time",
    "ensure_naive_utc",
    "ensure_utc",
    "get_app_timezone",
    "now_utc",
    "parse_datetime",
]
