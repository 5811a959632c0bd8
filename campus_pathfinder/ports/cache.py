"""Cache port - Injectable memoization for route queries.

The route engine recomputes every query by default. A cache can be
injected to memoize results keyed on the (start, end) pair; the engine
clears it whenever the store is reloaded.

Implementations:
- adapters/cache/memory_cache.py (InMemoryCache)
- adapters/cache/null_cache.py (NullCache)
"""

from __future__ import annotations

from typing import Callable, Hashable, Optional, Protocol, TypeVar

T = TypeVar("T")


class CachePort(Protocol[T]):
    """Port for caching computed values."""

    def get(self, key: Hashable) -> Optional[T]:
        """Get a value from the cache, or None on a miss."""
        ...

    def set(self, key: Hashable, value: T) -> None:
        ...

    def get_or_compute(self, key: Hashable, compute_fn: Callable[[], T]) -> T:
        """Return the cached value, computing and storing it on a miss.

        Exceptions raised by ``compute_fn`` propagate and nothing is
        stored.
        """
        ...

    def clear(self) -> int:
        """Clear all entries and return how many were removed."""
        ...

    def size(self) -> int:
        ...
