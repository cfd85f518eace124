"""SQLAlchemy model for the notification type catalog."""

from sqlalchemy import Boolean, Column, Integer, JSON, String, Text
from sqlalchemy.sql import expression

from app.infrastructure.database import Base


class NotificationTypeModel(Base):
    """Catalog row with the defaults applied to a notification type."""

    __tablename__ = "notification_types"

    id = Column(Integer, primary_key=True, index=True)
    key = Column(String(100), nullable=False, index=True)
    name = Column(String(120), nullable=False, default="")
    description = Column(Text, nullable=True)
    category = Column(String(50), nullable=False, default="general")
    default_priority = Column(String(20), nullable=False, default="normal")
    default_channels = Column(JSON, nullable=False, default=lambda: ["in_app"])
    default_delay_seconds = Column(Integer, nullable=False, default=0)
    is_active = Column(
        Boolean, nullable=False, default=True, server_default=expression.true()
    )


__all__ = ["NotificationTypeModel"]
