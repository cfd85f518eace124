"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Any, Iterable

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.domain.entities import (
    DEFAULT_CHANNELS,
    DELIVERY_STATUS_CANCELLED,
    DELIVERY_STATUS_SENT,
    DISPATCHABLE_STATUSES,
    Notification,
)
from app.infrastructure.models import NotificationModel
from app.utils import ensure_naive_utc, ensure_utc, now_utc


class NotificationRepository:
    """Provide CRUD operations for :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, notification_id: str) -> Notification | None:
        model = self.session.get(NotificationModel, notification_id)
        return self._to_entity(model) if model else None

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel()
        self._apply_entity_to_model(model, notification, include_creation_fields=True)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, notification: Notification) -> Notification:
        if notification.id is None:
            raise ValueError("Notification id is required for updates")
        model = self.session.get(NotificationModel, notification.id)
        if model is None:
            msg = f"Notification with id {notification.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, notification, include_creation_fields=False)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_by_metadata(
        self,
        *,
        type_key: str,
        metadata_key: str,
        metadata_value: str,
        user_id: str | None = None,
    ) -> Sequence[Notification]:
        """Return notifications of ``type_key`` whose metadata holds the given value.

        Rows are ordered oldest first so callers can keep the original row and
        treat the rest as duplicates.
        """

        query = self._metadata_query(
            type_key=type_key,
            metadata_key=metadata_key,
            metadata_value=metadata_value,
            user_id=user_id,
        ).order_by(NotificationModel.created_at.asc(), NotificationModel.id.asc())
        return [self._to_entity(model) for model in query.all()]

    def cancel_by_metadata(
        self,
        *,
        type_key: str,
        metadata_key: str,
        metadata_value: str,
        user_id: str | None = None,
        exclude_ids: Iterable[str] = (),
    ) -> int:
        """Cancel matching notifications, clearing their schedule and delivery time."""

        query = self._metadata_query(
            type_key=type_key,
            metadata_key=metadata_key,
            metadata_value=metadata_value,
            user_id=user_id,
        )
        excluded = [value for value in exclude_ids if value]
        if excluded:
            query = query.filter(NotificationModel.id.notin_(excluded))
        updated = query.update(
            {
                NotificationModel.delivery_status: DELIVERY_STATUS_CANCELLED,
                NotificationModel.scheduled_for: None,
                NotificationModel.delivered_at: None,
                NotificationModel.updated_at: ensure_naive_utc(now_utc()),
            },
            synchronize_session=False,
        )
        self.session.commit()
        return updated

    def list_due_ids(self, *, now: datetime, limit: int) -> list[str]:
        """Return identifiers of dispatchable notifications whose time has come."""

        cutoff = ensure_naive_utc(now)
        query = (
            self.session.query(NotificationModel.id)
            .filter(NotificationModel.delivery_status.in_(DISPATCHABLE_STATUSES))
            .filter(
                or_(
                    NotificationModel.scheduled_for.is_(None),
                    NotificationModel.scheduled_for <= cutoff,
                )
            )
            .order_by(NotificationModel.created_at.asc(), NotificationModel.id.asc())
            .limit(limit)
        )
        return [row.id for row in query.all()]

    def mark_as_sent(self, notification_ids: Iterable[str], *, delivered_at: datetime) -> int:
        """Promote the given notifications to ``sent``.

        Rows that left a dispatchable status since they were selected are
        skipped, so the returned count only covers rows this call promoted.
        """

        ids = [notification_id for notification_id in notification_ids if notification_id]
        if not ids:
            return 0
        stamp = ensure_naive_utc(delivered_at)
        updated = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.id.in_(ids))
            .filter(NotificationModel.delivery_status.in_(DISPATCHABLE_STATUSES))
            .update(
                {
                    NotificationModel.delivery_status: DELIVERY_STATUS_SENT,
                    NotificationModel.delivered_at: stamp,
                    NotificationModel.updated_at: stamp,
                },
                synchronize_session=False,
            )
        )
        self.session.commit()
        return updated

    def _metadata_query(
        self,
        *,
        type_key: str,
        metadata_key: str,
        metadata_value: str,
        user_id: str | None,
    ):
        query = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.type_key == type_key)
            .filter(
                NotificationModel.metadata_[metadata_key].as_string()
                == str(metadata_value)
            )
        )
        if user_id is not None:
            query = query.filter(NotificationModel.user_id == user_id)
        return query

    @staticmethod
    def _apply_entity_to_model(
        model: NotificationModel,
        notification: Notification,
        *,
        include_creation_fields: bool,
    ) -> None:
        if include_creation_fields:
            if notification.id is not None:
                model.id = notification.id
            model.created_at = ensure_naive_utc(notification.created_at or now_utc())
            model.is_read = notification.is_read
        model.user_id = notification.user_id
        model.title = notification.title
        model.message = notification.message
        model.type_key = notification.type_key
        model.channels = list(notification.channels or DEFAULT_CHANNELS)
        model.priority = notification.priority
        model.delivery_status = notification.delivery_status
        model.scheduled_for = ensure_naive_utc(notification.scheduled_for)
        model.delivered_at = ensure_naive_utc(notification.delivered_at)
        model.expires_at = ensure_naive_utc(notification.expires_at)
        model.metadata_ = _plain_metadata(notification.metadata)
        model.updated_at = ensure_naive_utc(now_utc())

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            title=model.title,
            message=model.message,
            type_key=model.type_key,
            channels=list(model.channels or DEFAULT_CHANNELS),
            priority=model.priority,
            delivery_status=model.delivery_status,
            scheduled_for=ensure_utc(model.scheduled_for),
            delivered_at=ensure_utc(model.delivered_at),
            expires_at=ensure_utc(model.expires_at),
            metadata=dict(model.metadata_ or {}),
            is_read=bool(model.is_read),
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
        )


def _plain_metadata(metadata: dict[str, Any] | None) -> dict[str, Any]:
    """Return a JSON-serializable copy of ``metadata``."""

    plain: dict[str, Any] = {}
    for key, value in (metadata or {}).items():
        if isinstance(value, datetime):
            plain[key] = value.isoformat()
        else:
            plain[key] = value
    return plain


__all__ = ["NotificationRepository"]
