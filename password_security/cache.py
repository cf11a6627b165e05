"""
cache.py

In-memory cache of breach range responses keyed by 5 character hash prefix.

One RangeCache is built at start-up and handed to the BreachChecker. Entries
expire after their TTL; the cache never grows past max_entries.
"""

from __future__ import annotations
import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Dict, NamedTuple, Optional, Tuple

logger = logging.getLogger(__name__)

DEFAULT_CACHE_TTL = 60 * 60  # seconds
DEFAULT_CACHE_SIZE = 1000


class RangeEntry(NamedTuple):
    suffix: str
    count: int


@dataclass(frozen=True)
class CacheEntry:
    data: Tuple[RangeEntry, ...]
    inserted_at: float
    ttl: float

    def expired(self, now: float) -> bool:
        return now - self.inserted_at > self.ttl


class RangeCache:
    """
    Thread-safe TTL cache for range query results.

    Values are immutable tuples, so a reader holding an entry is unaffected
    by a concurrent sweep or replacement.
    """

    def __init__(self, ttl: float = DEFAULT_CACHE_TTL, max_entries: int = DEFAULT_CACHE_SIZE,
                 clock: Callable[[], float] = time.monotonic):
        if ttl <= 0:
            raise ValueError("ttl must be positive")
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.ttl = ttl
        self.max_entries = max_entries
        self._clock = clock
        self._entries: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def get(self, prefix: str) -> Optional[Tuple[RangeEntry, ...]]:
        key = prefix.upper()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return None
            if entry.expired(self._clock()):
                del self._entries[key]
                self._evictions += 1
                self._misses += 1
                return None
            self._hits += 1
            return entry.data

    def put(self, prefix: str, entries, ttl: Optional[float] = None) -> None:
        key = prefix.upper()
        entry = CacheEntry(data=tuple(entries), inserted_at=self._clock(),
                           ttl=self.ttl if ttl is None else ttl)
        with self._lock:
            self._entries.pop(key, None)
            self._entries[key] = entry
            if len(self._entries) > self.max_entries:
                self._sweep_locked()
                while len(self._entries) > self.max_entries:
                    self._entries.popitem(last=False)
                    self._evictions += 1

    def sweep(self) -> int:
        """Drop expired entries; returns how many were removed."""
        with self._lock:
            return self._sweep_locked()

    def _sweep_locked(self) -> int:
        now = self._clock()
        stale = [k for k, e in self._entries.items() if e.expired(now)]
        for k in stale:
            del self._entries[k]
        self._evictions += len(stale)
        if stale:
            logger.debug("range cache swept %d expired entries", len(stale))
        return len(stale)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._hits = self._misses = self._evictions = 0

    def stats(self) -> Dict[str, int]:
        with self._lock:
            return {
                "size": len(self._entries),
                "hits": self._hits,
                "misses": self._misses,
                "evictions": self._evictions,
            }

    def __contains__(self, prefix: str) -> bool:
        with self._lock:
            entry = self._entries.get(prefix.upper())
            return entry is not None and not entry.expired(self._clock())

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
