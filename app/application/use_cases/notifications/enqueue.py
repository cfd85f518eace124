"""Turn a notification intent into a persisted notification record."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.entities import (
    DEFAULT_CHANNELS,
    PRIORITIES,
    PRIORITY_NORMAL,
    Notification,
    NotificationType,
)
from app.infrastructure.notifications import NotificationTypeCache
from app.infrastructure.repositories import NotificationRepository
from app.utils import ensure_utc, now_utc

from .catalog import get_type_config
from .preferences import get_user_preferences, should_deliver
from .scheduling import determine_scheduled_for, initial_delivery_status

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EnqueueResult:
    """Outcome of :func:`enqueue`.

    ``notification`` is ``None`` when the record could not be written; the
    status is still the one the record would have been stored with.
    """

    status: str
    notification: Notification | None = None


def enqueue(
    session: Session,
    *,
    user_id: str,
    type_key: str | None,
    title: str,
    message: str,
    metadata: dict[str, Any] | None = None,
    scheduled_for: datetime | str | None = None,
    priority: str | None = None,
    channels: Sequence[str] | None = None,
    cache: NotificationTypeCache | None = None,
    now: datetime | None = None,
) -> EnqueueResult:
    """Create a notification for ``user_id`` with its initial delivery status.

    Type defaults fill in ``priority`` and ``channels`` when the caller leaves
    them out, the user's preferences may cancel the notification, and the
    schedule decides between ``scheduled`` and ``pending``. A failing write is
    logged and swallowed: the caller's own operation must not fail because a
    notification could not be stored.

    Raises ``ValueError`` when ``priority`` is not a known priority or when
    ``scheduled_for`` is a string that is not a valid ISO-8601 datetime.
    """

    if not user_id:
        raise ValueError("A recipient user id is required to enqueue a notification")
    if priority is not None and priority not in PRIORITIES:
        raise ValueError(f"Unknown notification priority '{priority}'")

    reference = ensure_utc(now) if now is not None else now_utc()

    type_config = get_type_config(session, type_key, cache=cache)
    preferences = get_user_preferences(session, user_id)
    deliverable = should_deliver(type_key, preferences)

    effective_schedule = determine_scheduled_for(scheduled_for, type_config, now=reference)
    status = initial_delivery_status(
        deliverable=deliverable, scheduled_for=effective_schedule, now=reference
    )

    resolved_priority = priority or _catalog_priority(type_config)
    resolved_channels = list(
        channels or (type_config.default_channels if type_config else None) or DEFAULT_CHANNELS
    )

    notification = Notification(
        id=None,
        user_id=user_id,
        title=title,
        message=message,
        type_key=type_key,
        channels=resolved_channels,
        priority=resolved_priority,
        delivery_status=status,
        scheduled_for=effective_schedule,
        metadata=dict(metadata or {}),
        created_at=reference,
    )

    try:
        saved = NotificationRepository(session).create(notification)
    except SQLAlchemyError as exc:
        session.rollback()
        logger.warning(
            "Failed to enqueue %s notification for user %s (non-blocking): %s",
            type_key or "untyped",
            user_id,
            exc,
        )
        return EnqueueResult(status=status)

    logger.debug(
        "Enqueued notification %s (%s) for user %s with status %s",
        saved.id,
        type_key,
        user_id,
        status,
    )
    return EnqueueResult(status=status, notification=saved)


def _catalog_priority(type_config: NotificationType | None) -> str:
    if type_config is None or not type_config.default_priority:
        return PRIORITY_NORMAL
    if type_config.default_priority not in PRIORITIES:
        logger.warning(
            "Notification type '%s' has unknown default priority %r; using '%s'",
            type_config.key,
            type_config.default_priority,
            PRIORITY_NORMAL,
        )
        return PRIORITY_NORMAL
    return type_config.default_priority


__all__ = ["EnqueueResult", "enqueue"]
