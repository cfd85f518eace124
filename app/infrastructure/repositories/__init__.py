"""Repository implementations for infrastructure layer."""

from .chat_repository import ChatRepository
from .counseling_session_repository import CounselingSessionRepository
from .notification_repository import NotificationRepository
from .notification_type_repository import NotificationTypeRepository
from .profile_repository import ProfileRepository

__all__ = [
    "ChatRepository",
    "CounselingSessionRepository",
    "NotificationRepository",
    "NotificationTypeRepository",
    "ProfileRepository",
]
