"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class _CamelCaseRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)


class MessageEventRequest(_CamelCaseRequest):
    """Event raised after a chat message has been stored."""

    message_id: str = Field(..., alias="messageId", min_length=1)


class PatientAssignmentEventRequest(_CamelCaseRequest):
    """Event raised after a patient has been paired with a counselor."""

    patient_id: str = Field(..., alias="patientId", min_length=1)
    counselor_id: str = Field(..., alias="counselorId", min_length=1)
    assigned_by: str | None = Field(default=None, alias="assignedBy")


class SessionEventRequest(_CamelCaseRequest):
    """Event raised after a session was created, updated or cancelled."""

    session_id: str = Field(..., alias="sessionId", min_length=1)


class TypeCacheInvalidateRequest(BaseModel):
    """Catalog key to evict; every key is evicted when omitted."""

    key: str | None = Field(default=None, min_length=1)


class NotificationEventAccepted(BaseModel):
    """Acknowledgement returned once an event has been queued for processing."""

    success: bool = True


class DispatchRunResponse(BaseModel):
    """Summary of a reminder seed and dispatch sweep."""

    success: bool = True
    seeded: int
    dispatched: int
    timestamp: datetime


__all__ = [
    "DispatchRunResponse",
    "MessageEventRequest",
    "NotificationEventAccepted",
    "PatientAssignmentEventRequest",
    "SessionEventRequest",
    "TypeCacheInvalidateRequest",
]
