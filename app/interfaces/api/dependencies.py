"""FastAPI dependency utilities."""

from secrets import compare_digest

from fastapi import Depends, Header, HTTPException, status

from app.config import Settings, get_settings
from app.infrastructure.notifications import NotificationTypeCache, notification_type_cache


def get_type_cache() -> NotificationTypeCache:
    """Return the notification type cache shared by the process."""

    return notification_type_cache


def require_notification_token(
    x_notification_token: str | None = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> None:
    """Reject the request unless it carries the configured shared secret.

    The check is skipped when ``NOTIFICATION_API_TOKEN`` is not configured.
    """

    expected = settings.notification_api_token
    if not expected:
        return
    if not x_notification_token or not compare_digest(x_notification_token, expected):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid notification token",
        )
