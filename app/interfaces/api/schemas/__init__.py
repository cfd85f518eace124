from .notification import (
    DispatchRunResponse,
    MessageEventRequest,
    NotificationEventAccepted,
    PatientAssignmentEventRequest,
    SessionEventRequest,
    TypeCacheInvalidateRequest,
)

__all__ = [
    "DispatchRunResponse",
    "MessageEventRequest",
    "NotificationEventAccepted",
    "PatientAssignmentEventRequest",
    "SessionEventRequest",
    "TypeCacheInvalidateRequest",
]
