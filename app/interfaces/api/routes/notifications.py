"""Endpoints that feed platform events into the notification engine."""

from __future__ import annotations

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, Response, status
from sqlalchemy.orm import Session, sessionmaker

from app.application.use_cases.notifications import (
    dispatch_due_notifications as dispatch_due_notifications_uc,
    enqueue_message_notifications as enqueue_message_notifications_uc,
    enqueue_patient_assignment_notifications as enqueue_patient_assignment_notifications_uc,
    ensure_session_reminder_for_session as ensure_session_reminder_for_session_uc,
    seed_upcoming_session_reminders as seed_upcoming_session_reminders_uc,
)
from app.config import Settings, get_settings
from app.infrastructure.database import get_db, get_session_factory
from app.infrastructure.notifications import NotificationTypeCache, run_notification_job
from app.interfaces.api.dependencies import get_type_cache, require_notification_token
from app.interfaces.api.schemas import (
    DispatchRunResponse,
    MessageEventRequest,
    NotificationEventAccepted,
    PatientAssignmentEventRequest,
    SessionEventRequest,
    TypeCacheInvalidateRequest,
)
from app.utils import now_utc

router = APIRouter(
    prefix="/notifications",
    tags=["notifications"],
    dependencies=[Depends(require_notification_token)],
)
logger = logging.getLogger(__name__)


@router.post(
    "/events/message",
    response_model=NotificationEventAccepted,
    status_code=status.HTTP_202_ACCEPTED,
)
def message_event(
    payload: MessageEventRequest,
    background_tasks: BackgroundTasks,
    session_factory: sessionmaker = Depends(get_session_factory),
    cache: NotificationTypeCache = Depends(get_type_cache),
) -> NotificationEventAccepted:
    """Queue notifications for the recipients of a chat message."""

    background_tasks.add_task(
        run_notification_job,
        session_factory,
        enqueue_message_notifications_uc,
        message_id=payload.message_id,
        cache=cache,
    )
    return NotificationEventAccepted()


@router.post(
    "/events/patient-assignment",
    response_model=NotificationEventAccepted,
    status_code=status.HTTP_202_ACCEPTED,
)
def patient_assignment_event(
    payload: PatientAssignmentEventRequest,
    background_tasks: BackgroundTasks,
    session_factory: sessionmaker = Depends(get_session_factory),
    cache: NotificationTypeCache = Depends(get_type_cache),
) -> NotificationEventAccepted:
    """Queue the counselor and patient notifications for a new assignment."""

    background_tasks.add_task(
        run_notification_job,
        session_factory,
        enqueue_patient_assignment_notifications_uc,
        patient_id=payload.patient_id,
        counselor_id=payload.counselor_id,
        assigned_by=payload.assigned_by,
        cache=cache,
    )
    return NotificationEventAccepted()


@router.post(
    "/events/session",
    response_model=NotificationEventAccepted,
    status_code=status.HTTP_202_ACCEPTED,
)
def session_event(
    payload: SessionEventRequest,
    background_tasks: BackgroundTasks,
    session_factory: sessionmaker = Depends(get_session_factory),
    cache: NotificationTypeCache = Depends(get_type_cache),
) -> NotificationEventAccepted:
    """Reconcile the reminders of a session after it changed."""

    background_tasks.add_task(
        run_notification_job,
        session_factory,
        ensure_session_reminder_for_session_uc,
        payload.session_id,
        cache=cache,
    )
    return NotificationEventAccepted()


@router.post("/dispatch", response_model=DispatchRunResponse)
def dispatch_notifications(
    db: Session = Depends(get_db),
    cache: NotificationTypeCache = Depends(get_type_cache),
    settings: Settings = Depends(get_settings),
) -> DispatchRunResponse:
    """Seed upcoming session reminders, then promote due notifications."""

    seeded = seed_upcoming_session_reminders_uc(
        db, settings.reminder_seed_window_minutes, cache=cache
    )
    dispatched = dispatch_due_notifications_uc(db, settings.notification_dispatch_limit)
    logger.info("Dispatch run finished: %s sessions seeded, %s sent", seeded, dispatched)
    return DispatchRunResponse(seeded=seeded, dispatched=dispatched, timestamp=now_utc())


@router.post("/types/cache/invalidate", status_code=status.HTTP_204_NO_CONTENT)
def invalidate_type_cache(
    payload: TypeCacheInvalidateRequest | None = None,
    cache: NotificationTypeCache = Depends(get_type_cache),
) -> Response:
    """Drop cached catalog entries so the next lookup reads the catalog again."""

    cache.invalidate(payload.key if payload else None)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
