"""Per-cell view-state cache tied to the selection generation.

Cell view states are pure derivations of the selection and the bounds/filter
configuration, so the cache is never patched: any change to those inputs
invalidates every entry at once. The session is the only caller of
``invalidate_all``.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Hashable
from typing import Any, Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ViewStateCache(Generic[T]):
    """Memoizes derived cell states keyed by cell position.

    Example:
        cache = ViewStateCache(max_size=512)
        state = cache.get_or_compute((2025, 1, 2, 3), lambda: resolver.resolve(...))

        # after any selection or configuration change
        cache.invalidate_all()
    """

    def __init__(self, max_size: int = 512):
        """Initialize view-state cache.

        Args:
            max_size: Entry limit; the oldest entry is dropped first when exceeded
        """
        self.max_size = max_size
        self.generation = 0
        # key -> (state, generation it was computed in)
        self.cache: dict[Hashable, tuple[T, int]] = {}
        self.stats: Counter[str] = Counter()

    def get_or_compute(self, key: Hashable, compute: Callable[[], T]) -> T:
        """Return the state stored for ``key`` in this generation, computing it on a miss.

        Args:
            key: Cell position, e.g. (year, month, row, column)
            compute: Zero-argument callable producing the state
        """
        entry = self.cache.get(key)
        if entry is not None and entry[1] == self.generation:
            self.stats["hits"] += 1
            return entry[0]

        self.stats["misses"] += 1
        state = compute()
        self.cache[key] = (state, self.generation)
        if len(self.cache) > self.max_size:
            self._evict_oldest()
        return state

    def _evict_oldest(self) -> None:
        # dicts keep insertion order
        evicted = next(iter(self.cache))
        self.cache.pop(evicted)
        self.stats["evictions"] += 1
        logger.debug("Evicted view state %s (%d/%d)", evicted, len(self.cache), self.max_size)

    def invalidate_all(self) -> None:
        """Drop every cached state and start a new generation."""
        dropped = len(self.cache)
        self.cache.clear()
        self.generation += 1
        self.stats["invalidations"] += 1
        logger.debug("View-state generation %d (dropped %d)", self.generation, dropped)

    def __len__(self) -> int:
        return len(self.cache)

    def get_stats(self) -> dict[str, Any]:
        """Counters plus size, generation and hit_rate (percent, two decimals)."""
        lookups = self.stats["hits"] + self.stats["misses"]
        return {
            "hits": self.stats["hits"],
            "misses": self.stats["misses"],
            "hit_rate": round(100 * self.stats["hits"] / lookups, 2) if lookups else 0.0,
            "evictions": self.stats["evictions"],
            "invalidations": self.stats["invalidations"],
            "current_size": len(self.cache),
            "max_size": self.max_size,
            "generation": self.generation,
        }
