"""
Time-windowed duplicate suppression for access counting and marker writes.

A DedupGuard remembers when each key was last let through. Keys seen again
inside the window are suppressed. Once the map grows past max_entries, entries
older than the window are pruned, so memory stays bounded by traffic within one
window rather than growing forever.
"""

import threading
from datetime import datetime, timedelta
from typing import Dict


class DedupGuard:
    """
    Process-local suppression map, safe to share across handlers and threads.

    Usage:
        guard = DedupGuard(timedelta(minutes=30), max_entries=10_000)
        if guard.should_skip(f"{item_id}:{client_key}", now):
            return
    """

    def __init__(self, window: timedelta, max_entries: int):
        if window <= timedelta(0):
            raise ValueError("window must be positive")
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self.window = window
        self.max_entries = max_entries
        self._seen: Dict[str, datetime] = {}
        self._lock = threading.Lock()

    def should_skip(self, key: str, now: datetime) -> bool:
        """
        True if key was let through less than window ago.
        Otherwise records key at now and returns False.
        """
        with self._lock:
            last_seen = self._seen.get(key)
            if last_seen is not None and now - last_seen < self.window:
                return True
            self._seen[key] = now
            if len(self._seen) > self.max_entries:
                self._prune(now)
            return False

    def _prune(self, now: datetime) -> None:
        expired = [k for k, ts in self._seen.items() if now - ts > self.window]
        for k in expired:
            del self._seen[k]

    def forget(self, key: str) -> None:
        with self._lock:
            self._seen.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._seen.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._seen)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._seen
