# cryptoconv/services/price_cache.py
"""
In-memory USD price cache with a fixed one-minute window.
Keeps the converter from re-hitting the price API for the same coin
while the user flips between pairs.
"""

from __future__ import annotations

import math
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

CACHE_TTL_SECONDS = 60


@dataclass(frozen=True)
class CacheEntry:
    price: float
    fetched_at: float


class PriceCache:
    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        # fetch workers write from their own threads
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, coin_id: str) -> bool:
        return self.get(coin_id) is not None

    def _live(self, coin_id: str, now: float) -> Optional[CacheEntry]:
        entry = self._entries.get(coin_id)
        if entry is None:
            return None
        if now - entry.fetched_at > CACHE_TTL_SECONDS:
            del self._entries[coin_id]
            return None
        return entry

    def get(self, coin_id: str) -> Optional[float]:
        """Return the cached price if fresh, evicting it otherwise."""
        with self._lock:
            entry = self._live(coin_id, self._clock())
        return entry.price if entry else None

    def put(self, coin_id: str, price: float) -> None:
        with self._lock:
            self._entries[coin_id] = CacheEntry(price=price, fetched_at=self._clock())

    def sweep(self) -> int:
        """Drop every expired entry. Returns how many were removed."""
        now = self._clock()
        with self._lock:
            stale = [k for k, e in self._entries.items() if now - e.fetched_at > CACHE_TTL_SECONDS]
            for k in stale:
                del self._entries[k]
        return len(stale)

    def remaining_ttl(self, coin_id: str) -> Optional[int]:
        """Whole seconds left before the entry expires, for display."""
        now = self._clock()
        with self._lock:
            entry = self._live(coin_id, now)
        if entry is None:
            return None
        age = math.floor(now - entry.fetched_at)
        return max(0, CACHE_TTL_SECONDS - age)
