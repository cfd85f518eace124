"""Promote due notifications to ``sent``."""

from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import get_settings
from app.infrastructure.repositories import NotificationRepository
from app.utils import ensure_utc, now_utc

logger = logging.getLogger(__name__)


def dispatch_due_notifications(
    session: Session,
    limit: int | None = None,
    *,
    now: datetime | None = None,
) -> int:
    """Mark up to ``limit`` due notifications as sent and return how many were.

    A notification is due when it is ``pending`` or ``scheduled`` and its
    ``scheduled_for`` is empty or not in the future. Marking a row as sent
    means it is ready for channel providers to pick up; no provider is called
    here. Errors are logged and reported as zero dispatched notifications.

    Two sweeps running at the same time may select the same rows; only one of
    them promotes each row, but neither locks the selection.
    """

    batch_size = limit if limit is not None else get_settings().notification_dispatch_limit
    if batch_size <= 0:
        return 0

    reference = ensure_utc(now) if now is not None else now_utc()
    repository = NotificationRepository(session)

    try:
        due_ids = repository.list_due_ids(now=reference, limit=batch_size)
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Failed to query pending notifications")
        return 0

    if not due_ids:
        return 0

    try:
        dispatched = repository.mark_as_sent(due_ids, delivered_at=reference)
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Failed to mark %s notifications as sent", len(due_ids))
        return 0

    logger.info("Dispatched %s of %s due notifications", dispatched, len(due_ids))
    return dispatched


__all__ = ["dispatch_due_notifications"]
