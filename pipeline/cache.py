"""Bounded LRU cache for computed statute comparisons."""
from __future__ import annotations

from collections import OrderedDict
from typing import Callable, Generic, Optional, TypeVar

from config.settings import settings
from utils.logging import logger


T = TypeVar("T")


def cache_key(key: str) -> str:
    """Canonical cache key: bill numbers are compared trimmed and upper-cased."""
    return (key or "").strip().upper()


class ReviewCache(Generic[T]):
    """Least-recently-used cache with an explicit size bound.

    The owner decides the lifetime; nothing here is module-global.
    """

    def __init__(self, max_entries: Optional[int] = None):
        if max_entries is None:
            max_entries = settings.review_cache_max_entries
        if max_entries < 1:
            raise ValueError("max_entries must be positive")
        self.max_entries = max_entries
        self._entries: "OrderedDict[str, T]" = OrderedDict()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return cache_key(key) in self._entries

    def get(self, key: str) -> Optional[T]:
        k = cache_key(key)
        if k not in self._entries:
            self.misses += 1
            return None
        self.hits += 1
        self._entries.move_to_end(k)
        return self._entries[k]

    def put(self, key: str, value: T) -> None:
        k = cache_key(key)
        if k in self._entries:
            self._entries.move_to_end(k)
        self._entries[k] = value
        while len(self._entries) > self.max_entries:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("Evicted %s from review cache", evicted)

    def get_or_compute(self, key: str, factory: Callable[[], T]) -> T:
        cached = self.get(key)
        if cached is not None:
            return cached
        value = factory()
        self.put(key, value)
        return value

    def clear(self, key: Optional[str] = None) -> None:
        """Clear a single entry, or the entire cache if no key is given."""
        if key is None:
            self._entries.clear()
        else:
            self._entries.pop(cache_key(key), None)
