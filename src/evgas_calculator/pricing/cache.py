"""Region price cache — TTL-bounded, process-wide, explicitly owned.

Construct one per process and inject it into ``PriceResolver``.  Tests build
a fresh cache (and usually a fake clock) per case.
"""

from __future__ import annotations

import threading
import time
from typing import Any, Callable

NATIONAL_KEY = "national"

DEFAULT_MAX_ENTRIES = 1024


class RegionPriceCache:
    """Maps (namespace, region) → (value, stored_at).

    Namespaces keep gas and electricity entries for the same state apart.
    Stale entries are dropped when read and swept on every write.  If the
    cache is still over ``max_entries`` after a sweep, the oldest entries go.
    """

    def __init__(
        self,
        ttl_seconds: float = 12 * 60 * 60,
        clock: Callable[[], float] = time.monotonic,
        max_entries: int = DEFAULT_MAX_ENTRIES,
    ) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self._ttl = ttl_seconds
        self._clock = clock
        self._max_entries = max_entries
        self._entries: dict[tuple[str, str], tuple[Any, float]] = {}
        self._lock = threading.Lock()

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    @property
    def max_entries(self) -> int:
        return self._max_entries

    @staticmethod
    def _key(namespace: str, region: str) -> tuple[str, str]:
        if region == NATIONAL_KEY:
            return namespace, region
        return namespace, region.strip().upper()

    def _is_stale(self, stored_at: float, now: float) -> bool:
        return now - stored_at >= self._ttl

    def get(self, namespace: str, region: str) -> Any | None:
        """Fresh cached value, or None when missing or older than the TTL."""
        key = self._key(namespace, region)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, stored_at = entry
            if self._is_stale(stored_at, self._clock()):
                del self._entries[key]
                return None
            return value

    def put(self, namespace: str, region: str, value: Any) -> None:
        key = self._key(namespace, region)
        with self._lock:
            now = self._clock()
            self._entries.pop(key, None)
            self._entries[key] = (value, now)
            self._prune(now)

    def _prune(self, now: float) -> None:
        # Caller holds the lock.  Insertion order is write order, so the
        # first keys are the oldest.
        for key in [k for k, (_, stored_at) in self._entries.items()
                    if self._is_stale(stored_at, now)]:
            del self._entries[key]
        while len(self._entries) > self._max_entries:
            del self._entries[next(iter(self._entries))]

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
