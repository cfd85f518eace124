"""Read access to the notification type catalog."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.domain.entities import DEFAULT_CHANNELS, NotificationType
from app.infrastructure.models import NotificationTypeModel


class NotificationTypeRepository:
    """Look up :class:`NotificationType` catalog rows."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_active_by_key(self, key: str) -> NotificationType | None:
        model = (
            self.session.query(NotificationTypeModel)
            .filter(NotificationTypeModel.key == key)
            .filter(NotificationTypeModel.is_active.is_(True))
            .order_by(NotificationTypeModel.id.asc())
            .first()
        )
        return self._to_entity(model) if model else None

    @staticmethod
    def _to_entity(model: NotificationTypeModel) -> NotificationType:
        channels = tuple(model.default_channels or ()) or DEFAULT_CHANNELS
        return NotificationType(
            key=model.key,
            name=model.name or "",
            description=model.description,
            category=model.category or "general",
            default_priority=model.default_priority or "normal",
            default_channels=channels,
            default_delay_seconds=int(model.default_delay_seconds or 0),
            is_active=bool(model.is_active),
        )


__all__ = ["NotificationTypeRepository"]
