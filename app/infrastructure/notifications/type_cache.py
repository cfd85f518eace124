"""Process-wide cache for notification type catalog entries."""

from __future__ import annotations

from threading import Lock

from app.domain.entities import NotificationType


class NotificationTypeCache:
    """Keep resolved :class:`NotificationType` rows keyed by type key.

    Entries never expire on their own. Catalog edits made out of band become
    visible after :meth:`invalidate` is called or the process restarts.
    """

    def __init__(self) -> None:
        self._entries: dict[str, NotificationType] = {}
        self._lock = Lock()

    def get(self, key: str) -> NotificationType | None:
        return self._entries.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def set(self, config: NotificationType) -> NotificationType:
        """Store ``config`` unless another caller stored the key first.

        Returns the entry that ends up in the cache.
        """

        with self._lock:
            return self._entries.setdefault(config.key, config)

    def invalidate(self, key: str | None = None) -> None:
        """Drop ``key`` from the cache, or every entry when ``key`` is ``None``."""

        with self._lock:
            if key is None:
                self._entries.clear()
            else:
                self._entries.pop(key, None)


notification_type_cache = NotificationTypeCache()


__all__ = ["NotificationTypeCache", "notification_type_cache"]
