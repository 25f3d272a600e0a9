"""In-memory TTL cache shared by the prior-period loader and the forecast use case."""

from __future__ import annotations

import time
from typing import Callable, Dict, Generic, Hashable, Optional, Tuple, TypeVar

V = TypeVar("V")


class TTLCache(Generic[V]):
    """
    Key/value store whose entries expire ``ttl_seconds`` after being set.

    The clock is injectable so expiry can be tested without sleeping. A
    ``ttl_seconds`` of zero disables caching.
    """

    def __init__(
        self,
        ttl_seconds: float,
        max_size: int = 1024,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        if ttl_seconds < 0:
            raise ValueError("ttl_seconds must not be negative")
        self._ttl = ttl_seconds
        self._max_size = max_size
        self._clock = clock or time.monotonic
        self._entries: Dict[Hashable, Tuple[float, V]] = {}

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def get(self, key: Hashable) -> Optional[V]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        stored_at, value = entry
        if self._clock() - stored_at >= self._ttl:
            del self._entries[key]
            return None
        return value

    def set(self, key: Hashable, value: V) -> None:
        if self._ttl == 0:
            return
        self._cleanup()
        self._entries[key] = (self._clock(), value)

        if len(self._entries) > self._max_size:
            oldest = sorted(self._entries.items(), key=lambda item: item[1][0])
            for stale_key, _ in oldest[: len(self._entries) - self._max_size]:
                del self._entries[stale_key]

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        self._cleanup()
        return len(self._entries)

    def _cleanup(self) -> None:
        now = self._clock()
        expired = [
            key
            for key, (stored_at, _) in self._entries.items()
            if now - stored_at >= self._ttl
        ]
        for key in expired:
            del self._entries[key]
