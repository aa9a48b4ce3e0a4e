"""Thread-safe response cache with lazy expiry."""
import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

DEFAULT_TTL_SECONDS = 600  # 10 minutes


@dataclass(frozen=True)
class CacheEntry:
    """A parsed response body and the time it was written."""
    body: Any
    written_at: float

    def is_fresh(self, now: float, ttl_seconds: float) -> bool:
        return now - self.written_at < ttl_seconds


class ResponseCache:
    """
    In-memory cache of parsed API responses keyed by request path and query.

    Expiry is checked on read only; there is no background sweeper. An entry
    found expired on read is evicted. Safe to share between threads.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time
    ):
        """
        Initialize response cache.

        Args:
            ttl_seconds: How long an entry stays valid after being written
            clock: Source of the current time in seconds
        """
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: Dict[str, CacheEntry] = {}

    def get(self, key: str) -> Optional[Any]:
        """
        Look up a cached response body.

        Returns:
            The cached body, or None if absent or expired
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            now = self._clock()
            if entry.is_fresh(now, self.ttl_seconds):
                logging.debug(f"Cache hit for {key} (age: {now - entry.written_at:.1f}s)")
                return entry.body
            logging.debug(f"Cache entry for {key} expired (age: {now - entry.written_at:.1f}s, TTL: {self.ttl_seconds}s)")
            del self._entries[key]
            return None

    def put(self, key: str, body: Any) -> None:
        """Store a response body; the last writer wins."""
        with self._lock:
            self._entries[key] = CacheEntry(body=body, written_at=self._clock())

    def clear(self) -> None:
        """Drop every entry. Clearing an empty cache does nothing."""
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        if count:
            logging.info("Cleared %s cached responses", count)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            entry = self._entries.get(key)
            return entry is not None and entry.is_fresh(self._clock(), self.ttl_seconds)

    def __len__(self) -> int:
        with self._lock:
            now = self._clock()
            return sum(1 for entry in self._entries.values() if entry.is_fresh(now, self.ttl_seconds))
