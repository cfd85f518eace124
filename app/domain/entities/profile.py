"""Domain entities for user profiles and their notification preferences."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class UserPreferences:
    """Preferences that decide whether and when a user is notified."""

    notification_preferences: dict[str, Any] = field(default_factory=dict)
    support_preferences: dict[str, Any] = field(default_factory=dict)
    full_name: str = ""


@dataclass
class Profile:
    """Subset of the user profile read by the notification engine."""

    id: str
    full_name: str | None = None
    notification_preferences: dict[str, Any] = field(default_factory=dict)
    support_preferences: dict[str, Any] = field(default_factory=dict)

    def to_preferences(self) -> UserPreferences:
        return UserPreferences(
            notification_preferences=dict(self.notification_preferences or {}),
            support_preferences=dict(self.support_preferences or {}),
            full_name=self.full_name or "",
        )


__all__ = ["Profile", "UserPreferences"]
