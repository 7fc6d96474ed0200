"""Bounded LRU cache with TTL, used to remember translated command lists.

Callers pass already-digested keys (see ``hash.translation_key``).
"""

import threading
import time
from collections import OrderedDict
from dataclasses import dataclass, asdict
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass
class Stats:
    """Cache statistics."""

    size: int = 0
    max_size: int = 0
    hits: int = 0
    misses: int = 0
    evictions: int = 0
    expirations: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0

    def to_dict(self) -> dict[str, Any]:
        return {**asdict(self), "hit_rate": self.hit_rate}


@dataclass(frozen=True)
class _Entry(Generic[T]):
    value: T
    expires_at: float | None

    def expired(self, now: float) -> bool:
        return self.expires_at is not None and now >= self.expires_at


class LRUCache(Generic[T]):
    """
    Thread-safe LRU cache with optional TTL.

    Examples:
        >>> cache = LRUCache[str](max_size=100, ttl_seconds=3600)
        >>> cache.set("key", "value")
        >>> cache.get("key")
        'value'
    """

    def __init__(self, max_size: int = 100, ttl_seconds: int | None = None):
        if max_size <= 0:
            raise ValueError("max_size must be positive")
        if ttl_seconds is not None and ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive or None")

        self.max_size = max_size
        self.ttl_seconds = ttl_seconds
        self._entries: OrderedDict[str, _Entry[T]] = OrderedDict()
        self._stats = Stats(max_size=max_size)
        self._lock = threading.Lock()

    def get(self, key: str) -> T | None:
        """Return the cached value, or None if missing or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and entry.expired(time.time()):
                del self._entries[key]
                self._stats.expirations += 1
                entry = None

            if entry is None:
                self._stats.misses += 1
                self._stats.size = len(self._entries)
                return None

            self._entries.move_to_end(key)
            self._stats.hits += 1
            return entry.value

    def set(self, key: str, value: T) -> None:
        """Cache value, evicting least recently used entries when full."""
        expires_at = time.time() + self.ttl_seconds if self.ttl_seconds else None

        with self._lock:
            self._entries.pop(key, None)
            self._entries[key] = _Entry(value, expires_at)

            while len(self._entries) > self.max_size:
                self._entries.popitem(last=False)
                self._stats.evictions += 1

            self._stats.size = len(self._entries)

    def delete(self, key: str) -> bool:
        """Delete entry; True if it existed."""
        with self._lock:
            existed = self._entries.pop(key, None) is not None
            self._stats.size = len(self._entries)
            return existed

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._stats.size = 0

    @property
    def stats(self) -> Stats:
        return self._stats

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        # Does not touch LRU order or expire the entry
        return key in self._entries


__all__ = ["LRUCache", "Stats"]
