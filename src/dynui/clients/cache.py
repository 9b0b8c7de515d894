"""Response cache for the external schema generator."""

from typing import Any

from dynui.core.cache import LRUCache, Stats
from dynui.generation.models import GenerationResponse


class ResponseCache:
    """
    LRU cache of generator responses keyed by (model, data, answers).

    Only successful responses are stored; a failed call is never cached.
    Entries are copied in and out, so callers may edit the schema they get.
    """

    def __init__(self, max_size: int = 100, ttl_seconds: int = 3600) -> None:
        self._cache: LRUCache[GenerationResponse] = LRUCache(max_size=max_size, ttl_seconds=ttl_seconds)

    @staticmethod
    def key(model: str, data: dict[str, Any], answers: dict[str, str] | None) -> list[Any]:
        return [model, data, answers or {}]

    def get(self, key: list[Any]) -> GenerationResponse | None:
        cached = self._cache.get(key)
        return cached.model_copy(deep=True) if cached is not None else None

    def set(self, key: list[Any], response: GenerationResponse) -> None:
        self._cache.set(key, response.model_copy(deep=True))

    def clear(self) -> None:
        self._cache.clear()

    @property
    def stats(self) -> Stats:
        return self._cache.stats


__all__ = ["ResponseCache"]
