"""ORM models used by the application infrastructure."""

from .chat import ChatModel, MessageModel
from .counseling_session import CounselingSessionModel
from .notification import NotificationModel
from .notification_type import NotificationTypeModel
from .profile import ProfileModel

__all__ = [
    "ChatModel",
    "CounselingSessionModel",
    "MessageModel",
    "NotificationModel",
    "NotificationTypeModel",
    "ProfileModel",
]
