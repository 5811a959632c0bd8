"""Null cache implementation.

Always misses, so every route query is recomputed. Inject it where a
test must not depend on results memoized by an earlier call.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Generic, Hashable, Optional, TypeVar

T = TypeVar("T")


@dataclass
class NullCache(Generic[T]):
    """No-op cache - always misses."""

    name: str = "null"

    def get(self, key: Hashable) -> Optional[T]:
        return None

    def set(self, key: Hashable, value: T) -> None:
        pass

    def get_or_compute(self, key: Hashable, compute_fn: Callable[[], T]) -> T:
        return compute_fn()

    def clear(self) -> int:
        return 0

    def size(self) -> int:
        return 0

    def stats(self) -> Dict[str, int]:
        return {"size": 0, "hits": 0, "misses": 0, "hit_rate_percent": 0}
