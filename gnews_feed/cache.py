from __future__ import annotations

import threading
from typing import Optional

from .models import CacheEntry, FeedPayload

TTL_MS = 5 * 60 * 1000


class FeedCache:
    """
    Single-slot cache holding the most recently fetched payload.

    Only one category is held at a time: storing a payload for another category
    evicts the previous one even if it was still fresh. Expiry is lazy, checked on
    read. Entries are immutable and swapped in whole under a lock.
    """

    def __init__(self, ttl_ms: int = TTL_MS) -> None:
        self.ttl_ms = ttl_ms
        self._entry: Optional[CacheEntry] = None
        self._lock = threading.Lock()

    def get(self, category: str, now_ms: int) -> Optional[CacheEntry]:
        with self._lock:
            entry = self._entry
        if entry is None:
            return None
        if entry.category != category:
            return None
        if entry.age_ms(now_ms) >= self.ttl_ms:
            return None
        return entry

    def put(self, category: str, payload: FeedPayload, now_ms: int) -> CacheEntry:
        entry = CacheEntry(payload=payload, category=category, timestamp=now_ms)
        with self._lock:
            self._entry = entry
        return entry

    def peek(self) -> Optional[CacheEntry]:
        with self._lock:
            return self._entry
