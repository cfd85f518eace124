"""Compute delivery times and the initial delivery status of notifications."""

from __future__ import annotations

from datetime import datetime, timedelta

from app.domain.entities import (
    DELIVERY_STATUS_CANCELLED,
    DELIVERY_STATUS_PENDING,
    DELIVERY_STATUS_SCHEDULED,
    NotificationType,
)
from app.utils import ensure_utc, now_utc, parse_datetime


def determine_scheduled_for(
    requested: datetime | str | None,
    type_config: NotificationType | None,
    *,
    now: datetime | None = None,
) -> datetime | None:
    """Return the instant a notification becomes eligible for dispatch.

    An explicit ``requested`` time always wins. Without one, the type's
    default delay is applied; no config or a non-positive delay yields
    ``None``, meaning "next dispatch sweep".
    """

    if requested:
        return parse_datetime(requested)

    if type_config is None or type_config.default_delay_seconds <= 0:
        return None

    reference = ensure_utc(now) if now is not None else now_utc()
    return reference + timedelta(seconds=type_config.default_delay_seconds)


def initial_delivery_status(
    *,
    deliverable: bool,
    scheduled_for: datetime | None,
    now: datetime | None = None,
) -> str:
    if not deliverable:
        return DELIVERY_STATUS_CANCELLED
    reference = ensure_utc(now) if now is not None else now_utc()
    if scheduled_for is not None and ensure_utc(scheduled_for) > reference:
        return DELIVERY_STATUS_SCHEDULED
    return DELIVERY_STATUS_PENDING


__all__ = ["determine_scheduled_for", "initial_delivery_status"]
