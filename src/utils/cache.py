"""In-process TTL cache for upstream API responses."""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    """A cached value and the monotonic time it expires at."""
    value: Any
    expires_at: float
    stored_at: float


class TTLCache:
    """
    Thread-safe key/value cache with a per-entry time to live.
    
    Expired entries are dropped lazily on read and when the cache
    fills up. When still full, the oldest quarter of entries is evicted.
    """

    def __init__(
        self,
        max_size: int = 1000,
        timer: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the cache.
        
        Args:
            max_size: Maximum number of entries held at once
            timer: Monotonic time source in seconds
        """
        self._store: dict[str, CacheEntry] = {}
        self._lock = threading.RLock()
        self._max_size = max_size
        self._timer = timer
        self._hits = 0
        self._misses = 0

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or None if missing or expired."""
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                self._misses += 1
                return None
            if self._timer() >= entry.expires_at:
                del self._store[key]
                self._misses += 1
                return None
            self._hits += 1
            return entry.value

    def set(self, key: str, value: Any, ttl: float) -> None:
        """Store a value for ``ttl`` seconds."""
        with self._lock:
            now = self._timer()
            if key not in self._store and len(self._store) >= self._max_size:
                self._evict(now)
            self._store[key] = CacheEntry(
                value=value,
                expires_at=now + ttl,
                stored_at=now,
            )

    def delete(self, key: str) -> bool:
        """Remove a key. Returns True if it was present."""
        with self._lock:
            return self._store.pop(key, None) is not None

    def clear(self) -> None:
        """Drop every entry and reset statistics."""
        with self._lock:
            self._store.clear()
            self._hits = 0
            self._misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)

    @property
    def stats(self) -> dict[str, Any]:
        """Hit/miss statistics."""
        with self._lock:
            total = self._hits + self._misses
            return {
                "size": len(self._store),
                "max_size": self._max_size,
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": round(self._hits / max(total, 1) * 100, 1),
            }

    def _evict(self, now: float) -> None:
        expired = [k for k, entry in self._store.items() if now >= entry.expires_at]
        for k in expired:
            del self._store[k]
        
        if len(self._store) < self._max_size:
            return
        
        oldest = sorted(self._store, key=lambda k: self._store[k].stored_at)
        for k in oldest[:max(self._max_size // 4, 1)]:
            del self._store[k]
        logger.debug(f"Cache full, evicted {len(expired)} expired and oldest entries")
