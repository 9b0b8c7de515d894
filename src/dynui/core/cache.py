"""LRU cache with TTL and hit/miss statistics.

Keys are arbitrary JSON-serializable values; they are reduced to an xxhash64
fingerprint, so structurally equal requests share an entry.
"""

import time
from collections import OrderedDict
from dataclasses import asdict, dataclass
from typing import Any, Generic, TypeVar

from .hash import fingerprint

T = TypeVar("T")


@dataclass
class Stats:
    """Cache statistics."""

    size: int = 0
    max_size: int = 0
    hits: int = 0
    misses: int = 0
    evictions: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0

    def to_dict(self) -> dict[str, Any]:
        return {**asdict(self), "hit_rate": self.hit_rate}


class LRUCache(Generic[T]):
    """
    Least-recently-used cache with optional expiry.

    Examples:
        >>> cache = LRUCache[str](max_size=2)
        >>> cache.set({"q": 1}, "answer")
        >>> cache.get({"q": 1})
        'answer'
    """

    def __init__(self, max_size: int = 100, ttl_seconds: float | None = None) -> None:
        if max_size <= 0:
            raise ValueError("max_size must be positive")

        self.max_size = max_size
        self.ttl_seconds = ttl_seconds
        self._entries: OrderedDict[str, tuple[T, float]] = OrderedDict()
        self._stats = Stats(max_size=max_size)

    def _expired(self, stored_at: float) -> bool:
        return self.ttl_seconds is not None and time.monotonic() - stored_at >= self.ttl_seconds

    def get(self, key: Any) -> T | None:
        """Cached value, or None if absent or expired."""
        digest = fingerprint(key)
        entry = self._entries.get(digest)

        if entry is None:
            self._stats.misses += 1
            return None

        value, stored_at = entry
        if self._expired(stored_at):
            del self._entries[digest]
            self._stats.size = len(self._entries)
            self._stats.misses += 1
            return None

        self._entries.move_to_end(digest)
        self._stats.hits += 1
        return value

    def set(self, key: Any, value: T) -> None:
        digest = fingerprint(key)
        self._entries.pop(digest, None)
        self._entries[digest] = (value, time.monotonic())

        while len(self._entries) > self.max_size:
            self._entries.popitem(last=False)
            self._stats.evictions += 1

        self._stats.size = len(self._entries)

    def clear(self) -> None:
        self._entries.clear()
        self._stats.size = 0

    @property
    def stats(self) -> Stats:
        return self._stats

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Any) -> bool:
        return fingerprint(key) in self._entries


__all__ = ["LRUCache", "Stats"]
