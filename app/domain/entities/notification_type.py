"""Domain entity describing per-type notification defaults."""

from __future__ import annotations

from dataclasses import dataclass, field

from .notification import DEFAULT_CHANNELS, PRIORITY_NORMAL


@dataclass(frozen=True)
class NotificationType:
    """Catalog entry holding the defaults applied to a notification type."""

    key: str
    name: str = ""
    description: str | None = None
    category: str = "general"
    default_priority: str = PRIORITY_NORMAL
    default_channels: tuple[str, ...] = field(default=DEFAULT_CHANNELS)
    default_delay_seconds: int = 0
    is_active: bool = True


__all__ = ["NotificationType"]
