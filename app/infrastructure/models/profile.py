"""SQLAlchemy model for user profiles."""

from sqlalchemy import Column, JSON, String

from app.infrastructure.database import Base


class ProfileModel(Base):
    """Database representation of the profile fields used for notifications."""

    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True)
    full_name = Column(String(255), nullable=True)
    notification_preferences = Column(JSON, nullable=True)
    support_preferences = Column(JSON, nullable=True)


__all__ = ["ProfileModel"]
