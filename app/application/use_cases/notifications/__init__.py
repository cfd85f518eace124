"""Notification scheduling and dispatch use cases."""

from .catalog import get_type_config
from .dispatch import dispatch_due_notifications
from .enqueue import EnqueueResult, enqueue
from .events import (
    enqueue_message_notifications,
    enqueue_patient_assignment_notifications,
    truncate_message,
)
from .preferences import PREFERENCE_KEY_BY_TYPE, get_user_preferences, should_deliver
from .scheduling import determine_scheduled_for, initial_delivery_status
from .session_reminders import (
    ensure_session_reminder_for_session,
    reminder_lead_seconds,
    seed_upcoming_session_reminders,
)

__all__ = [
    "EnqueueResult",
    "PREFERENCE_KEY_BY_TYPE",
    "determine_scheduled_for",
    "dispatch_due_notifications",
    "enqueue",
    "enqueue_message_notifications",
    "enqueue_patient_assignment_notifications",
    "ensure_session_reminder_for_session",
    "get_type_config",
    "get_user_preferences",
    "initial_delivery_status",
    "reminder_lead_seconds",
    "seed_upcoming_session_reminders",
    "should_deliver",
    "truncate_message",
]
