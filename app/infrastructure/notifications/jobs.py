"""Run notification work detached from the request that triggered it."""

from __future__ import annotations

import logging
from typing import Any, Callable

from sqlalchemy.orm import Session, sessionmaker

logger = logging.getLogger(__name__)


def run_notification_job(
    session_factory: sessionmaker,
    job: Callable[..., Any],
    /,
    *args: Any,
    **kwargs: Any,
) -> None:
    """Invoke ``job(session, *args, **kwargs)`` on a dedicated session.

    Failures are logged and never re-raised: notification delivery must not
    affect the business operation that scheduled it.
    """

    session: Session = session_factory()
    try:
        job(session, *args, **kwargs)
    except Exception:
        session.rollback()
        logger.exception(
            "Notification job %s failed", getattr(job, "__name__", repr(job))
        )
    finally:
        session.close()


__all__ = ["run_notification_job"]
