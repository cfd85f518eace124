"""Resolve notification type defaults from the catalog."""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.entities import NotificationType
from app.infrastructure.notifications import NotificationTypeCache, notification_type_cache
from app.infrastructure.repositories import NotificationTypeRepository

logger = logging.getLogger(__name__)


def get_type_config(
    session: Session,
    type_key: str | None,
    *,
    cache: NotificationTypeCache | None = None,
) -> NotificationType | None:
    """Return the active catalog entry for ``type_key`` or ``None``.

    Hits are cached; misses and lookup failures are not, so a type added later
    or a catalog that recovers is picked up on the next call. Failures are
    logged and reported as "no config" so callers fall back to their own
    defaults.
    """

    if not type_key:
        return None

    cache = cache if cache is not None else notification_type_cache
    cached = cache.get(type_key)
    if cached is not None:
        return cached

    try:
        config = NotificationTypeRepository(session).get_active_by_key(type_key)
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Failed to load notification type config for '%s'", type_key)
        return None

    if config is None:
        return None
    return cache.set(config)


__all__ = ["get_type_config"]
