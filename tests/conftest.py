"""Shared fixtures for the notification engine tests."""

from __future__ import annotations

import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable

import pytest

# Ensure the project root (which contains the ``app`` package) is importable
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["APP_TIMEZONE"] = "UTC"

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.infrastructure import models
from app.infrastructure.database import Base
from app.infrastructure.notifications import NotificationTypeCache
from app.infrastructure.repositories import NotificationRepository

NOW = datetime(2025, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture()
def engine():
    """Return an in-memory SQLite engine shared by every connection of a test."""

    test_engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture()
def session_factory(engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db(session_factory) -> Session:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def type_cache() -> NotificationTypeCache:
    return NotificationTypeCache()


@pytest.fixture()
def add_notification_type(db: Session) -> Callable[..., models.NotificationTypeModel]:
    def _add(
        key: str,
        *,
        delay: int = 0,
        priority: str = "normal",
        channels: list[str] | None = None,
        is_active: bool = True,
    ) -> models.NotificationTypeModel:
        model = models.NotificationTypeModel(
            key=key,
            name=key.replace("_", " ").title(),
            category="general",
            default_priority=priority,
            default_channels=channels if channels is not None else ["in_app"],
            default_delay_seconds=delay,
            is_active=is_active,
        )
        db.add(model)
        db.commit()
        return model

    return _add


@pytest.fixture()
def add_profile(db: Session) -> Callable[..., models.ProfileModel]:
    def _add(
        profile_id: str,
        *,
        full_name: str | None = None,
        notification_preferences: dict[str, Any] | None = None,
        support_preferences: dict[str, Any] | None = None,
    ) -> models.ProfileModel:
        model = models.ProfileModel(
            id=profile_id,
            full_name=full_name,
            notification_preferences=notification_preferences,
            support_preferences=support_preferences,
        )
        db.add(model)
        db.commit()
        return model

    return _add


@pytest.fixture()
def add_session(db: Session) -> Callable[..., models.CounselingSessionModel]:
    def _add(
        session_id: str,
        *,
        patient_id: str = "patient-1",
        counselor_id: str = "counselor-1",
        date: str = "2025-06-01",
        time: str = "10:00",
        status: str = "scheduled",
    ) -> models.CounselingSessionModel:
        model = models.CounselingSessionModel(
            id=session_id,
            patient_id=patient_id,
            counselor_id=counselor_id,
            date=date,
            time=time,
            status=status,
            type="video",
            duration=50,
        )
        db.add(model)
        db.commit()
        return model

    return _add


@pytest.fixture()
def now() -> datetime:
    """Fixed reference instant used instead of the wall clock."""

    return NOW


@pytest.fixture()
def user_notifications(db: Session) -> Callable[[str], list]:
    """Return a loader for every notification stored for a user, oldest first."""

    def _load(user_id: str) -> list:
        ids = [
            notification_id
            for (notification_id,) in db.query(models.NotificationModel.id)
            .filter(models.NotificationModel.user_id == user_id)
            .order_by(models.NotificationModel.created_at.asc())
            .all()
        ]
        repository = NotificationRepository(db)
        return [repository.get(notification_id) for notification_id in ids]

    return _load
