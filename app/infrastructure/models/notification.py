"""SQLAlchemy model for persisted notifications."""

from uuid import uuid4

from sqlalchemy import Boolean, Column, DateTime, Index, JSON, String, Text
from sqlalchemy.sql import expression

from app.infrastructure.database import Base
from app.utils import ensure_naive_utc, now_utc


def _naive_utc_now():
    return ensure_naive_utc(now_utc())


class NotificationModel(Base):
    """Database representation for user notifications."""

    __tablename__ = "notifications"
    __table_args__ = (
        Index("ix_notifications_dispatch", "delivery_status", "scheduled_for"),
        Index("ix_notifications_user_type", "user_id", "type_key"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    user_id = Column(String(36), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    type_key = Column(String(100), nullable=True)
    channels = Column(JSON, nullable=False, default=lambda: ["in_app"])
    priority = Column(String(20), nullable=False, default="normal")
    delivery_status = Column(String(20), nullable=False, default="pending")
    scheduled_for = Column(DateTime(), nullable=True)
    delivered_at = Column(DateTime(), nullable=True)
    expires_at = Column(DateTime(), nullable=True)
    # ``metadata`` is reserved on declarative classes.
    metadata_ = Column("metadata", JSON, nullable=False, default=dict)
    is_read = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    created_at = Column(DateTime(), nullable=False, default=_naive_utc_now)
    updated_at = Column(
        DateTime(), nullable=False, default=_naive_utc_now, onupdate=_naive_utc_now
    )


__all__ = ["NotificationModel"]
