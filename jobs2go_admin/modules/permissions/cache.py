"""Process-local TTL cache for resolved permission sets."""

from __future__ import annotations

import threading
import time
from typing import Callable, Protocol

DEFAULT_TTL_SECONDS = 5 * 60


class PermissionCache(Protocol):
    def get(self, key: str) -> frozenset[str] | None:
        ...

    def set(self, key: str, value: frozenset[str]) -> None:
        ...

    def invalidate(self, key: str) -> None:
        ...

    def clear(self) -> None:
        ...


class InMemoryPermissionCache:
    """Map of key -> (permissions, stored_at); stale entries are dropped lazily on read."""

    def __init__(self, ttl_seconds: float = DEFAULT_TTL_SECONDS, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[frozenset[str], float]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> frozenset[str] | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, stored_at = entry
            if self._clock() - stored_at >= self.ttl_seconds:
                del self._entries[key]
                return None
            return value

    def set(self, key: str, value: frozenset[str]) -> None:
        with self._lock:
            self._entries[key] = (value, self._clock())

    def invalidate(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
