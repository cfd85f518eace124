"""Aggregate application use cases."""

from .notifications import (
    dispatch_due_notifications,
    enqueue,
    enqueue_message_notifications,
    enqueue_patient_assignment_notifications,
    ensure_session_reminder_for_session,
    seed_upcoming_session_reminders,
)

__all__ = [
    "dispatch_due_notifications",
    "enqueue",
    "enqueue_message_notifications",
    "enqueue_patient_assignment_notifications",
    "ensure_session_reminder_for_session",
    "seed_upcoming_session_reminders",
]
