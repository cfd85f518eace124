"""Database configuration and session management."""

from __future__ import annotations

from collections.abc import Generator
from typing import Any

import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from app.config import Settings, get_settings


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""


settings = get_settings()

logger = logging.getLogger(__name__)


def _build_engine_options(settings: Settings) -> dict[str, Any]:
    """Return ``create_engine`` keyword arguments bounding every store call.

    SQLite receives a busy timeout, PostgreSQL a per-statement timeout and a
    connect timeout. Every pooled backend also gets a checkout timeout.
    """

    url = make_url(settings.database_url)
    timeout = settings.store_timeout_seconds
    options: dict[str, Any] = {"pool_pre_ping": True}

    if url.get_backend_name() == "sqlite":
        options["connect_args"] = {"timeout": timeout, "check_same_thread": False}
        return options

    options["pool_timeout"] = timeout
    if url.get_backend_name() == "postgresql":
        options["connect_args"] = {
            "connect_timeout": max(1, int(timeout)),
            "options": f"-c statement_timeout={int(timeout * 1000)}",
        }
    else:
        logger.warning(
            "No statement timeout is applied for the '%s' backend; only the pool "
            "checkout timeout of %ss is enforced.",
            url.get_backend_name(),
            timeout,
        )
    return options


engine = create_engine(settings.database_url, **_build_engine_options(settings))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def initialize_database() -> None:
    """Ensure all ORM models have corresponding database tables."""

    from app.infrastructure import models  # noqa: F401  # ensure models are imported

    Base.metadata.create_all(bind=engine, checkfirst=True)


def get_db() -> Generator[Session, None, None]:
    """Yield a database session and close it afterwards."""

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_session_factory() -> sessionmaker:
    """Return the factory used by background jobs to open their own sessions."""

    return SessionLocal
