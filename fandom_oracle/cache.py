# fandom_oracle/cache.py
"""
Freshness cache for signed envelopes.

Entries expire lazily: a stale entry is never swept, lookup simply stops
returning it and the next successful insert replaces it.
"""

import threading
import time
from typing import Callable, Dict, Optional, Tuple


class FreshnessCache:
    def __init__(self, ttl_secs: int, clock: Callable[[], float] = time.time):
        self.ttl_secs = ttl_secs
        self._clock = clock
        self._entries: Dict[str, Tuple[float, str]] = {}
        self._lock = threading.Lock()

    def lookup(self, key: str) -> Optional[Tuple[float, str]]:
        """Return (age_secs, value) for a fresh entry, else None."""
        with self._lock:
            entry = self._entries.get(key)
        if entry is None:
            return None
        stored_at, value = entry
        age = self._clock() - stored_at
        if age < self.ttl_secs:
            return age, value
        return None

    def insert(self, key: str, value: str) -> None:
        stored_at = self._clock()
        with self._lock:
            self._entries[key] = (stored_at, value)

    def __contains__(self, key: str) -> bool:
        # Presence regardless of freshness.
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
