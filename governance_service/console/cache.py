"""Tag-based view cache for the console with path revalidation.

Each fetch is cached under a tag (``users``, ``user-<id>``, ``user-<id>-posts`` ...)
for the window configured for that kind of data. Mutations revalidate *paths*;
a path expands to the tags its page reads.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, TypeVar

from governance_service.config import Settings, settings as default_settings


logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class _Entry:
    value: Any
    expires_at: float


def user_tag(user_id: str) -> str:
    return f"user-{user_id}"


def user_posts_tag(user_id: str) -> str:
    return f"user-{user_id}-posts"


def user_preferences_tag(user_id: str) -> str:
    return f"user-{user_id}-preferences"


def window_for_tag(tag: str, settings: Settings) -> int:
    if tag == "users":
        return settings.cache_users_seconds
    if tag == "stats":
        return settings.cache_stats_seconds
    if tag.endswith("-posts"):
        return settings.cache_posts_seconds
    if tag.endswith("-preferences"):
        return settings.cache_preferences_seconds
    if tag.startswith("user-"):
        return settings.cache_user_detail_seconds
    return 0


def tags_for_path(path: str) -> set[str]:
    parts = [p for p in path.strip("/").split("/") if p]
    if not parts:
        return {"stats"}
    if parts == ["users"]:
        return {"users", "stats"}
    if parts[0] == "users" and len(parts) == 2:
        user_id = parts[1]
        return {user_tag(user_id), user_posts_tag(user_id), user_preferences_tag(user_id)}
    if parts[0] == "users" and len(parts) == 3 and parts[2] == "preferences":
        return {user_preferences_tag(parts[1])}
    return set()


class ViewCache:
    def __init__(self, settings: Settings | None = None, clock: Callable[[], float] = time.monotonic) -> None:
        self._settings = settings or default_settings
        self._clock = clock
        self._entries: dict[str, _Entry] = {}
        # Only tags with a load in flight carry a generation.
        self._loading: dict[str, int] = {}
        self._generations: dict[str, int] = {}
        self._lock = threading.Lock()

    def fetch(self, tag: str, loader: Callable[[], T], *, revalidate: int | None = None) -> T:
        """Return the cached value for ``tag`` or load, store and return a fresh one.

        ``revalidate`` overrides the configured window; 0 bypasses the cache.
        A load that is revalidated while it runs is returned but not stored.
        """

        window = window_for_tag(tag, self._settings) if revalidate is None else revalidate
        if window <= 0:
            return loader()

        now = self._clock()
        with self._lock:
            entry = self._entries.get(tag)
            if entry is not None and entry.expires_at > now:
                return entry.value
            generation = self._generations.get(tag, 0)
            self._loading[tag] = self._loading.get(tag, 0) + 1

        try:
            value = loader()
            with self._lock:
                if self._generations.get(tag, 0) == generation:
                    self._evict_expired(now)
                    self._entries[tag] = _Entry(value=value, expires_at=now + window)
                else:
                    logger.debug("discarding stale load tag=%s", tag)
        finally:
            with self._lock:
                self._finish_load(tag)
        return value

    def _finish_load(self, tag: str) -> None:
        remaining = self._loading.get(tag, 1) - 1
        if remaining > 0:
            self._loading[tag] = remaining
        else:
            self._loading.pop(tag, None)
            self._generations.pop(tag, None)

    def _evict_expired(self, now: float) -> None:
        for tag in [t for t, entry in self._entries.items() if entry.expires_at <= now]:
            del self._entries[tag]

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def cached_tags(self) -> set[str]:
        now = self._clock()
        with self._lock:
            return {tag for tag, entry in self._entries.items() if entry.expires_at > now}

    def revalidate_tag(self, tag: str) -> None:
        with self._lock:
            self._entries.pop(tag, None)
            if tag in self._loading:
                self._generations[tag] = self._generations.get(tag, 0) + 1

    def revalidate_path(self, path: str) -> None:
        tags = tags_for_path(path)
        logger.debug("revalidate path=%s tags=%s", path, sorted(tags))
        for tag in tags:
            self.revalidate_tag(tag)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            for tag in self._loading:
                self._generations[tag] = self._generations.get(tag, 0) + 1

    # Mutation hooks

    def user_created(self) -> None:
        self.revalidate_path("/users")

    def user_changed(self, user_id: str) -> None:
        self.revalidate_path("/users")
        self.revalidate_path(f"/users/{user_id}")

    def posts_changed(self, user_id: str) -> None:
        self.revalidate_path(f"/users/{user_id}")
        self.revalidate_path("/users")

    def preferences_changed(self, user_id: str) -> None:
        self.revalidate_path(f"/users/{user_id}")
        self.revalidate_path(f"/users/{user_id}/preferences")
