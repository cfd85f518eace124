"""Translate platform events into notification enqueue calls."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Final

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.entities import (
    PRIORITY_HIGH,
    PRIORITY_NORMAL,
    TYPE_MESSAGE_RECEIVED,
    TYPE_PATIENT_ASSIGNMENT,
    Profile,
)
from app.infrastructure.notifications import NotificationTypeCache
from app.infrastructure.repositories import ChatRepository, ProfileRepository

from .enqueue import EnqueueResult, enqueue

logger = logging.getLogger(__name__)

MESSAGE_PREVIEW_LIMIT: Final[int] = 140
_ELLIPSIS: Final[str] = "..."
_DEFAULT_SENDER_NAME: Final[str] = "New message"
_DEFAULT_PATIENT_NAME: Final[str] = "Patient"
_DEFAULT_COUNSELOR_NAME: Final[str] = "Counselor"


def truncate_message(content: str, limit: int = MESSAGE_PREVIEW_LIMIT) -> str:
    """Shorten ``content`` to ``limit`` characters, ellipsis included."""

    if len(content) <= limit:
        return content
    return f"{content[: limit - len(_ELLIPSIS)]}{_ELLIPSIS}"


def enqueue_message_notifications(
    session: Session,
    *,
    message_id: str,
    cache: NotificationTypeCache | None = None,
    now: datetime | None = None,
) -> list[EnqueueResult]:
    """Notify every chat participant except the sender about a new message.

    Each recipient is handled on its own: a failure for one of them is logged
    and does not stop the others.
    """

    repository = ChatRepository(session)
    try:
        message = repository.get_message(message_id)
        chat = repository.get_chat(message.chat_id) if message else None
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Message lookup failed for message notification %s", message_id)
        return []

    if message is None:
        logger.error("Message %s not found; no notification enqueued", message_id)
        return []
    if chat is None:
        logger.error(
            "Chat %s not found for message %s; no notification enqueued",
            message.chat_id,
            message_id,
        )
        return []

    sender_name = (
        message.sender_name
        or chat.participant_names.get(message.sender_id)
        or _DEFAULT_SENDER_NAME
    )
    recipients: list[str] = []
    for participant_id in chat.participants:
        if participant_id and participant_id != message.sender_id and participant_id not in recipients:
            recipients.append(participant_id)

    metadata = {
        "messageId": message.id,
        "chatId": message.chat_id,
        "senderId": message.sender_id,
        "senderName": sender_name,
        "createdAt": message.created_at.isoformat() if message.created_at else None,
    }

    results: list[EnqueueResult] = []
    for recipient_id in recipients:
        try:
            result = enqueue(
                session,
                user_id=recipient_id,
                type_key=TYPE_MESSAGE_RECEIVED,
                title=f"{sender_name} sent you a message",
                message=truncate_message(message.content),
                metadata=metadata,
                priority=PRIORITY_HIGH,
                cache=cache,
                now=now,
            )
        except Exception:
            session.rollback()
            logger.exception(
                "Failed to enqueue message notification for recipient %s", recipient_id
            )
            continue
        results.append(result)
    return results


def enqueue_patient_assignment_notifications(
    session: Session,
    *,
    patient_id: str,
    counselor_id: str,
    assigned_by: str | None = None,
    cache: NotificationTypeCache | None = None,
    now: datetime | None = None,
) -> list[EnqueueResult]:
    """Tell the counselor and the patient about their new pairing."""

    profiles = _load_profiles(session, patient_id, counselor_id)
    patient_name = _display_name(profiles.get(patient_id), _DEFAULT_PATIENT_NAME)
    counselor_name = _display_name(profiles.get(counselor_id), _DEFAULT_COUNSELOR_NAME)

    requests = (
        dict(
            user_id=counselor_id,
            title="New patient assignment",
            message=f"You have been assigned a new patient: {patient_name}.",
            metadata={
                "patientId": patient_id,
                "patientName": patient_name,
                "assignedBy": assigned_by,
            },
            priority=PRIORITY_HIGH,
        ),
        dict(
            user_id=patient_id,
            title="Your counselor has been assigned",
            message=f"You have been paired with counselor {counselor_name}.",
            metadata={
                "counselorId": counselor_id,
                "counselorName": counselor_name,
                "assignedBy": assigned_by,
            },
            priority=PRIORITY_NORMAL,
        ),
    )

    results: list[EnqueueResult] = []
    for request in requests:
        try:
            result = enqueue(
                session,
                type_key=TYPE_PATIENT_ASSIGNMENT,
                cache=cache,
                now=now,
                **request,
            )
        except Exception:
            session.rollback()
            logger.exception(
                "Failed to enqueue assignment notification for user %s", request["user_id"]
            )
            continue
        results.append(result)
    return results


def _load_profiles(session: Session, *profile_ids: str) -> dict[str, Profile]:
    try:
        return ProfileRepository(session).get_map_by_ids(profile_ids)
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Failed to load profiles %s for assignment notification", profile_ids)
        return {}


def _display_name(profile: Profile | None, fallback: str) -> str:
    if profile is None or not profile.full_name:
        return fallback
    return profile.full_name


__all__ = [
    "MESSAGE_PREVIEW_LIMIT",
    "enqueue_message_notifications",
    "enqueue_patient_assignment_notifications",
    "truncate_message",
]
