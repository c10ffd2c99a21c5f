"""
In-Memory Store

Process-local Store implementation.

Implementation Details:
- OrderedDict keeps insertion/access order so the oldest entry is evicted
  first when ``max_items`` is reached
- Thread-safe via threading.Lock
- Optional TTL; expired entries read as misses and are purged by
  ``clear_expired()`` (see the ClearExpiredByFactor plugin)

This store is not shared across processes. Use RedisStore for that.

Author: System Architect
Date: 2026-10-17
"""

import threading
import time
from collections import OrderedDict
from typing import Any

from callcache.infrastructure.cache.base_store import BaseStore


class MemoryStore(BaseStore):
    """
    Dict-backed store with optional TTL and capacity.

    Usage:
        store = MemoryStore(ttl=300, max_items=1000)
        store.set("key", {"rows": 3})
        value, found = store.get("key")
    """

    adapter_name = "memory"

    def __init__(self, ttl: int | None = None, max_items: int | None = None):
        """
        Args:
            ttl: Seconds an entry stays readable (None = forever)
            max_items: Maximum number of entries (None = unbounded)
        """
        super().__init__()
        self._ttl = ttl
        self._max_items = max_items
        # key -> (value, expires_at or None)
        self._data: OrderedDict[str, tuple[Any, float | None]] = OrderedDict()
        self._lock = threading.Lock()

    def _is_expired(self, expires_at: float | None, now: float) -> bool:
        return expires_at is not None and expires_at <= now

    def _has(self, key: str) -> bool:
        with self._lock:
            entry = self._data.get(key)
            return entry is not None and not self._is_expired(entry[1], time.monotonic())

    def _get(self, key: str) -> tuple[Any, bool]:
        with self._lock:
            entry = self._data.get(key)
            if entry is None or self._is_expired(entry[1], time.monotonic()):
                return None, False
            self._data.move_to_end(key)
            return entry[0], True

    def _set(self, key: str, value: Any) -> None:
        expires_at = time.monotonic() + self._ttl if self._ttl else None
        with self._lock:
            if key in self._data:
                self._data.move_to_end(key)
            self._data[key] = (value, expires_at)

            if self._max_items is not None:
                while len(self._data) > self._max_items:
                    self._data.popitem(last=False)

    def _delete(self, key: str) -> bool:
        with self._lock:
            return self._data.pop(key, None) is not None

    def _clear(self) -> None:
        with self._lock:
            self._data.clear()

    def clear_expired(self) -> int:
        """
        Drop expired entries.

        Returns:
            Number of entries removed
        """
        now = time.monotonic()
        with self._lock:
            expired = [key for key, (_, expires_at) in self._data.items() if self._is_expired(expires_at, now)]
            for key in expired:
                del self._data[key]
        return len(expired)

    def optimize(self) -> None:
        """Rebuild the backing dict to release memory held by deleted slots."""
        with self._lock:
            self._data = OrderedDict(self._data)

    def get_size(self) -> int:
        """Get current number of entries, expired ones included."""
        with self._lock:
            return len(self._data)

    def keys(self) -> list[str]:
        """Get all keys, oldest first."""
        with self._lock:
            return list(self._data.keys())
