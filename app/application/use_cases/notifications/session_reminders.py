"""Keep session reminder notifications in line with their sessions.

Reconciliation derives the expected reminder of every participant from the
current session row, so it can run after any create, update, reschedule or
cancellation, as many times as needed, and end in the same state.

The lookup of an existing reminder and the following insert are not
serialized: two reconciliations of the same session running at the same
time can both insert a row. The next reconciliation keeps the oldest row and
cancels the others.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Any, Final, Mapping

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import get_settings
from app.domain.entities import (
    DELIVERY_STATUS_CANCELLED,
    PRIORITY_NORMAL,
    SESSION_STATUS_SCHEDULED,
    TYPE_SESSION_REMINDER,
    CounselingSession,
    Notification,
    Profile,
    UserPreferences,
)
from app.infrastructure.notifications import NotificationTypeCache
from app.infrastructure.repositories import (
    CounselingSessionRepository,
    NotificationRepository,
    ProfileRepository,
)
from app.utils import combine_local_date_time, ensure_utc, get_app_timezone, now_utc

from .catalog import get_type_config
from .enqueue import enqueue
from .preferences import should_deliver
from .scheduling import initial_delivery_status

logger = logging.getLogger(__name__)

REMINDER_TITLE: Final[str] = "Upcoming counseling session"
REMINDER_MESSAGE: Final[str] = (
    "You have an upcoming counseling session. Make sure you are prepared."
)
SESSION_METADATA_KEY: Final[str] = "sessionId"


def ensure_session_reminder_for_session(
    session: Session,
    session_id: str,
    *,
    cache: NotificationTypeCache | None = None,
    now: datetime | None = None,
) -> list[Notification]:
    """Create, move or cancel the reminders of ``session_id``.

    Returns the reminder of each participant as it stands after the call; the
    list is empty when the session is not scheduled or cannot be processed.
    """

    reference = ensure_utc(now) if now is not None else now_utc()

    try:
        counseling_session = CounselingSessionRepository(session).get(session_id)
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Failed to load session %s for reminder", session_id)
        return []

    if counseling_session is None:
        logger.error("Session %s not found; reminder not scheduled", session_id)
        return []

    if counseling_session.status != SESSION_STATUS_SCHEDULED:
        _cancel_session_reminders(session, counseling_session)
        return []

    starts_at = combine_local_date_time(counseling_session.date, counseling_session.time)
    if starts_at is None:
        logger.error(
            "Invalid session datetime for session %s (date=%r, time=%r); reminder skipped",
            counseling_session.id,
            counseling_session.date,
            counseling_session.time,
        )
        return []

    type_config = get_type_config(session, TYPE_SESSION_REMINDER, cache=cache)
    default_lead_seconds = (
        type_config.default_delay_seconds
        if type_config is not None
        else get_settings().default_reminder_lead_seconds
    )

    participants = counseling_session.participant_ids()
    profiles = _load_profiles(session, participants)

    reminders: list[Notification] = []
    for user_id in participants:
        profile = profiles.get(user_id)
        preferences = profile.to_preferences() if profile else UserPreferences()
        try:
            reminder = _reconcile_participant_reminder(
                session,
                counseling_session=counseling_session,
                user_id=user_id,
                starts_at=starts_at,
                lead_seconds=reminder_lead_seconds(
                    preferences.support_preferences, default_lead_seconds
                ),
                preferences=preferences,
                cache=cache,
                now=reference,
            )
        except (SQLAlchemyError, ValueError):
            session.rollback()
            logger.exception(
                "Failed to reconcile reminder for user %s on session %s",
                user_id,
                counseling_session.id,
            )
            continue
        if reminder is not None:
            reminders.append(reminder)
    return reminders


def seed_upcoming_session_reminders(
    session: Session,
    window_minutes: int | None = None,
    *,
    cache: NotificationTypeCache | None = None,
    now: datetime | None = None,
) -> int:
    """Reconcile every scheduled session starting within ``window_minutes``.

    Sessions are matched by calendar date in the application timezone, from
    today up to the date reached at the end of the window. Returns the number
    of sessions reconciled.
    """

    window = (
        window_minutes
        if window_minutes is not None
        else get_settings().reminder_seed_window_minutes
    )
    if window <= 0:
        return 0

    reference = ensure_utc(now) if now is not None else now_utc()
    timezone = get_app_timezone()
    start_date = reference.astimezone(timezone).date()
    end_date = (reference + timedelta(minutes=window)).astimezone(timezone).date()

    try:
        session_ids = CounselingSessionRepository(session).list_ids_by_status_between(
            status=SESSION_STATUS_SCHEDULED, start=start_date, end=end_date
        )
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Failed to query sessions for reminders")
        return 0

    seeded = 0
    for session_id in session_ids:
        try:
            ensure_session_reminder_for_session(session, session_id, cache=cache, now=reference)
        except Exception:
            session.rollback()
            logger.exception("Failed to seed reminder for session %s", session_id)
            continue
        seeded += 1

    logger.info("Seeded reminders for %s of %s upcoming sessions", seeded, len(session_ids))
    return seeded


def reminder_lead_seconds(
    support_preferences: Mapping[str, Any] | None, default_seconds: int
) -> int:
    """Return the reminder lead time in seconds.

    ``reminderLeadTime`` is expressed in minutes and may be stored as a number
    or a numeric string. Anything else, or a non-positive value, falls back to
    ``default_seconds``.
    """

    raw_value = (support_preferences or {}).get("reminderLeadTime")
    if raw_value is None or isinstance(raw_value, bool):
        return default_seconds
    try:
        minutes = float(raw_value)
    except (TypeError, ValueError):
        return default_seconds
    if not math.isfinite(minutes) or minutes <= 0:
        return default_seconds
    return int(round(minutes * 60))


def _reconcile_participant_reminder(
    session: Session,
    *,
    counseling_session: CounselingSession,
    user_id: str,
    starts_at: datetime,
    lead_seconds: int,
    preferences: UserPreferences,
    cache: NotificationTypeCache | None,
    now: datetime,
) -> Notification | None:
    scheduled_for = max(starts_at - timedelta(seconds=lead_seconds), now)
    deliverable = should_deliver(TYPE_SESSION_REMINDER, preferences)
    metadata = {
        SESSION_METADATA_KEY: counseling_session.id,
        "startsAt": starts_at.isoformat(),
        "leadSeconds": lead_seconds,
    }

    repository = NotificationRepository(session)
    existing = repository.list_by_metadata(
        type_key=TYPE_SESSION_REMINDER,
        metadata_key=SESSION_METADATA_KEY,
        metadata_value=counseling_session.id,
        user_id=user_id,
    )

    if not existing:
        result = enqueue(
            session,
            user_id=user_id,
            type_key=TYPE_SESSION_REMINDER,
            title=REMINDER_TITLE,
            message=REMINDER_MESSAGE,
            metadata=metadata,
            scheduled_for=scheduled_for,
            priority=PRIORITY_NORMAL,
            cache=cache,
            now=now,
        )
        return result.notification

    current, *duplicates = existing
    if duplicates:
        logger.warning(
            "Found %s duplicate reminders for user %s on session %s; cancelling extras",
            len(duplicates),
            user_id,
            counseling_session.id,
        )
        repository.cancel_by_metadata(
            type_key=TYPE_SESSION_REMINDER,
            metadata_key=SESSION_METADATA_KEY,
            metadata_value=counseling_session.id,
            user_id=user_id,
            exclude_ids=[current.id],
        )

    if _reminder_is_current(current, metadata, deliverable):
        return current

    status = initial_delivery_status(
        deliverable=deliverable, scheduled_for=scheduled_for, now=now
    )
    updated = replace(
        current,
        scheduled_for=scheduled_for,
        delivery_status=status,
        delivered_at=None,
        metadata={**current.metadata, **metadata},
    )
    return repository.update(updated)


def _reminder_is_current(
    reminder: Notification, metadata: Mapping[str, Any], deliverable: bool
) -> bool:
    """Return ``True`` when ``reminder`` already reflects the session and preferences."""

    if reminder.scheduled_for is None:
        return False
    stored = reminder.metadata or {}
    if stored.get("startsAt") != metadata["startsAt"]:
        return False
    if stored.get("leadSeconds") != metadata["leadSeconds"]:
        return False
    is_cancelled = reminder.delivery_status == DELIVERY_STATUS_CANCELLED
    return is_cancelled != deliverable


def _cancel_session_reminders(session: Session, counseling_session: CounselingSession) -> None:
    try:
        cancelled = NotificationRepository(session).cancel_by_metadata(
            type_key=TYPE_SESSION_REMINDER,
            metadata_key=SESSION_METADATA_KEY,
            metadata_value=counseling_session.id,
        )
    except SQLAlchemyError:
        session.rollback()
        logger.exception(
            "Failed to cancel reminders for session %s", counseling_session.id
        )
        return
    logger.info(
        "Cancelled %s reminders for session %s (status %s)",
        cancelled,
        counseling_session.id,
        counseling_session.status,
    )


def _load_profiles(session: Session, user_ids: list[str]) -> dict[str, Profile]:
    try:
        return ProfileRepository(session).get_map_by_ids(user_ids)
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Failed to load reminder preferences for %s", user_ids)
        return {}


__all__ = [
    "REMINDER_MESSAGE",
    "REMINDER_TITLE",
    "ensure_session_reminder_for_session",
    "reminder_lead_seconds",
    "seed_upcoming_session_reminders",
]
