"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

DELIVERY_STATUS_PENDING = "pending"
DELIVERY_STATUS_SCHEDULED = "scheduled"
DELIVERY_STATUS_SENT = "sent"
DELIVERY_STATUS_FAILED = "failed"
DELIVERY_STATUS_CANCELLED = "cancelled"

DISPATCHABLE_STATUSES = (DELIVERY_STATUS_PENDING, DELIVERY_STATUS_SCHEDULED)

PRIORITY_LOW = "low"
PRIORITY_NORMAL = "normal"
PRIORITY_HIGH = "high"
PRIORITY_CRITICAL = "critical"

PRIORITIES = frozenset({PRIORITY_LOW, PRIORITY_NORMAL, PRIORITY_HIGH, PRIORITY_CRITICAL})

CHANNEL_IN_APP = "in_app"
DEFAULT_CHANNELS: tuple[str, ...] = (CHANNEL_IN_APP,)

TYPE_MESSAGE_RECEIVED = "message_received"
TYPE_PATIENT_ASSIGNMENT = "patient_assignment"
TYPE_SESSION_REMINDER = "session_reminder"
TYPE_SYSTEM_ALERT = "system_alert"


@dataclass
class Notification:
    """Message addressed to a single user with its delivery state."""

    id: str | None
    user_id: str
    title: str
    message: str
    type_key: str | None = None
    channels: list[str] = field(default_factory=lambda: list(DEFAULT_CHANNELS))
    priority: str = PRIORITY_NORMAL
    delivery_status: str = DELIVERY_STATUS_PENDING
    scheduled_for: datetime | None = None
    delivered_at: datetime | None = None
    expires_at: datetime | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    is_read: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


__all__ = [
    "CHANNEL_IN_APP",
    "DEFAULT_CHANNELS",
    "DELIVERY_STATUS_CANCELLED",
    "DELIVERY_STATUS_FAILED",
    "DELIVERY_STATUS_PENDING",
    "DELIVERY_STATUS_SCHEDULED",
    "DELIVERY_STATUS_SENT",
    "DISPATCHABLE_STATUSES",
    "Notification",
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
