"""
Scratch Store: in-memory key-value store with per-key TTL.

Holds needs_update / needs_resurrection_check markers and the related-items
cache. Used for local runs and tests; FirestoreScratchStore is the shared
backend when several replicas run.
"""

import threading
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional, Tuple


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryScratchStore:
    """
    Process-local TTL store. Expired entries read as absent and are dropped
    lazily on access.
    """

    def __init__(self, clock: Callable[[], datetime] = _utcnow):
        self._clock = clock
        self._entries: Dict[str, Tuple[str, datetime]] = {}
        self._lock = threading.Lock()

    def _live(self, key: str, now: datetime) -> Optional[str]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at <= now:
            del self._entries[key]
            return None
        return value

    async def put(self, key: str, value: str, ttl_seconds: int) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        with self._lock:
            self._entries[key] = (value, self._clock() + timedelta(seconds=ttl_seconds))

    async def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._live(key, self._clock())

    async def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    async def keys(self, prefix: str = "") -> List[str]:
        with self._lock:
            now = self._clock()
            return sorted(
                k for k in list(self._entries)
                if k.startswith(prefix) and self._live(k, now) is not None
            )

    def expires_at(self, key: str) -> Optional[datetime]:
        """Expiry of a live key (for inspection), else None."""
        with self._lock:
            if self._live(key, self._clock()) is None:
                return None
            return self._entries[key][1]
