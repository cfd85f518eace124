"""Domain entities exposed by the application."""

from .chat import Chat, ChatMessage
from .counseling_session import (
    SESSION_STATUS_SCHEDULED,
    CounselingSession,
)
from .notification import (
    CHANNEL_IN_APP,
    DEFAULT_CHANNELS,
    DELIVERY_STATUS_CANCELLED,
    DELIVERY_STATUS_FAILED,
    DELIVERY_STATUS_PENDING,
    DELIVERY_STATUS_SCHEDULED,
    DELIVERY_STATUS_SENT,
    DISPATCHABLE_STATUSES,
    PRIORITIES,
    PRIORITY_CRITICAL,
    PRIORITY_HIGH,
    PRIORITY_LOW,
    PRIORITY_NORMAL,
    TYPE_MESSAGE_RECEIVED,
    TYPE_PATIENT_ASSIGNMENT,
    TYPE_SESSION_REMINDER,
    TYPE_SYSTEM_ALERT,
    Notification,
)
from .notification_type import NotificationType
from .profile import Profile, UserPreferences

__all__ = [
    "Chat",
    "ChatMessage",
    "CounselingSession",
    "SESSION_STATUS_SCHEDULED",
    "Notification",
    "NotificationType",
    "Profile",
    "UserPreferences",
    "CHANNEL_IN_APP",
    "DEFAULT_CHANNELS",
    "DELIVERY_STATUS_CANCELLED",
    "DELIVERY_STATUS_FAILED",
    "DELIVERY_STATUS_PENDING",
    "DELIVERY_STATUS_SCHEDULED",
    "DELIVERY_STATUS_SENT",
    "DISPATCHABLE_STATUSES",
    "PRIORITIES",
    "PRIORITY_CRITICAL",
    "PRIORITY_HIGH",
    "PRIORITY_LOW",
    "PRIORITY_NORMAL",
    "TYPE_MESSAGE_RECEIVED",
    "TYPE_PATIENT_ASSIGNMENT",
    "TYPE_SESSION_REMINDER",
    "TYPE_SYSTEM_ALERT",
]
