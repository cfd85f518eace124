"""Load user preferences and decide whether a notification may be delivered."""

from __future__ import annotations

import logging
from typing import Final, Mapping

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.entities import (
    TYPE_MESSAGE_RECEIVED,
    TYPE_PATIENT_ASSIGNMENT,
    TYPE_SESSION_REMINDER,
    TYPE_SYSTEM_ALERT,
    UserPreferences,
)
from app.infrastructure.repositories import ProfileRepository

logger = logging.getLogger(__name__)

# Only these types can be opted out of; every other type is always delivered.
PREFERENCE_KEY_BY_TYPE: Final[Mapping[str, str]] = {
    TYPE_MESSAGE_RECEIVED: "patientMessages",
    TYPE_PATIENT_ASSIGNMENT: "systemAlerts",
    TYPE_SESSION_REMINDER: "sessionReminders",
    TYPE_SYSTEM_ALERT: "systemAlerts",
}


def get_user_preferences(session: Session, user_id: str) -> UserPreferences:
    """Return the stored preferences for ``user_id``.

    A missing profile or a failing lookup yields empty preferences.
    """

    try:
        profile = ProfileRepository(session).get(user_id)
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Failed to load notification preferences for user %s", user_id)
        return UserPreferences()

    if profile is None:
        return UserPreferences()
    return profile.to_preferences()


def should_deliver(type_key: str | None, preferences: UserPreferences | None) -> bool:
    """Return ``False`` only when the user explicitly opted out of ``type_key``."""

    preference_key = PREFERENCE_KEY_BY_TYPE.get(type_key or "")
    if preference_key is None or preferences is None:
        return True

    raw_value = (preferences.notification_preferences or {}).get(preference_key)
    if isinstance(raw_value, bool):
        return raw_value
    return True


__all__ = ["PREFERENCE_KEY_BY_TYPE", "get_user_preferences", "should_deliver"]
