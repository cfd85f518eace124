"""Infrastructure helpers shared by the notification use cases."""

from .jobs import run_notification_job
from .type_cache import NotificationTypeCache, notification_type_cache

__all__ = [
    "NotificationTypeCache",
    "notification_type_cache",
    "run_notification_job",
]
