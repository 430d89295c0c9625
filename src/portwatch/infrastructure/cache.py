"""Caching implementation."""

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from portwatch.core.interfaces import ICache

K = TypeVar("K")
V = TypeVar("V")


@dataclass(frozen=True, slots=True)
class CachedItem(Generic[V]):
    """Cached value and the time it was stored."""

    value: V
    timestamp: float


class TTLCache(ICache[K, V]):
    """In-memory cache with per-entry expiry and a size bound.

    An entry is stale once ``now - timestamp > timeout``. ``cleanup`` drops
    stale entries first and then the oldest ones until at most
    ``max_size`` remain.
    """

    def __init__(
        self,
        timeout: float = 30.0,
        max_size: int = 1000,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._cache: dict[K, CachedItem[V]] = {}
        self._timeout = timeout
        self._max_size = max_size
        self._clock = clock

    @property
    def timeout(self) -> float:
        return self._timeout

    @property
    def max_size(self) -> int:
        return self._max_size

    def _is_expired(self, item: CachedItem[V], now: float) -> bool:
        return now - item.timestamp > self._timeout

    def get(self, key: K) -> V | None:
        """Get value from cache, evicting it if expired."""
        item = self._cache.get(key)
        if item is None:
            return None

        if self._is_expired(item, self._clock()):
            del self._cache[key]
            return None

        return item.value

    def set(self, key: K, value: V) -> None:
        """Store value stamped with the current time."""
        self._cache[key] = CachedItem(value=value, timestamp=self._clock())

    def has(self, key: K) -> bool:
        """Check if key exists in cache and is not expired."""
        item = self._cache.get(key)
        if item is None:
            return False

        if self._is_expired(item, self._clock()):
            del self._cache[key]
            return False

        return True

    def delete(self, key: K) -> None:
        """Delete value from cache."""
        self._cache.pop(key, None)

    def clear(self) -> None:
        """Clear all cached values."""
        self._cache.clear()

    def cleanup(self) -> int:
        """Remove expired entries, then trim to size. Returns count removed."""
        now = self._clock()
        expired_keys = [
            key for key, item in self._cache.items()
            if self._is_expired(item, now)
        ]

        for key in expired_keys:
            del self._cache[key]

        removed = len(expired_keys)
        overflow = len(self._cache) - self._max_size
        if overflow > 0:
            oldest = sorted(self._cache.items(), key=lambda entry: entry[1].timestamp)
            for key, _ in oldest[:overflow]:
                del self._cache[key]
            removed += overflow

        return removed

    def size(self) -> int:
        return len(self._cache)

    def __len__(self) -> int:
        return len(self._cache)
