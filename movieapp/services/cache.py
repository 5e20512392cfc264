"""
TTL Cache
Timestamp envelope over the key-value store with per-read expiration
"""
import logging
import time
from typing import Any, Callable, Dict, Optional

from movieapp.services.errors import SerializationError
from movieapp.services.store import KeyValueStore

logger = logging.getLogger(__name__)


def now_millis() -> int:
    """Current wall-clock time in epoch milliseconds"""
    return int(time.time() * 1000)


class TTLCache:
    """
    Cache-aside helper storing ``{"data": ..., "timestamp": ...}`` envelopes.

    The TTL is chosen by the reader, so each resource can be tuned
    independently. Expired entries read as absent and are left in place.
    """

    def __init__(self, store: KeyValueStore, clock: Optional[Callable[[], int]] = None):
        self.store = store
        self.clock = clock or now_millis
        self._metrics: Dict[str, int] = {
            "hit": 0,
            "miss": 0,
            "expired": 0,
            "write": 0,
            "write_failed": 0,
        }

    def _bump(self, key: str):
        if key in self._metrics:
            self._metrics[key] += 1

    def get_metrics_snapshot(self) -> Dict[str, int]:
        """Return a shallow copy of the cache counters."""
        return dict(self._metrics)

    @staticmethod
    def _unwrap(entry: Any) -> tuple:
        if not isinstance(entry, dict) or "data" not in entry or "timestamp" not in entry:
            raise SerializationError("Cache entry is missing data or timestamp")
        timestamp = entry["timestamp"]
        if not isinstance(timestamp, (int, float)) or isinstance(timestamp, bool):
            raise SerializationError(f"Cache entry timestamp is not numeric: {timestamp!r}")
        return entry["data"], timestamp

    async def read(self, key: str, ttl_ms: int) -> Optional[Any]:
        """
        Read a cached value if it is still fresh

        Args:
            key: Cache key
            ttl_ms: Maximum entry age in milliseconds

        Returns:
            Cached payload, or None when absent, expired or corrupt
        """
        entry = await self.store.get(key)
        if entry is None:
            self._bump("miss")
            return None

        try:
            data, written_at = self._unwrap(entry)
        except SerializationError as e:
            logger.warning(f"Ignoring corrupt cache entry {key}: {e}")
            self._bump("miss")
            return None

        if self.clock() - written_at >= ttl_ms:
            logger.debug("Cache entry expired for key=%s", key)
            self._bump("expired")
            return None

        self._bump("hit")
        return data

    async def write(self, key: str, value: Any) -> bool:
        """
        Store a value stamped with the current time

        Args:
            key: Cache key
            value: JSON-serializable payload

        Returns:
            True if the store accepted the write
        """
        ok = await self.store.set(key, {"data": value, "timestamp": self.clock()})
        self._bump("write" if ok else "write_failed")
        return ok

    async def remove(self, key: str) -> bool:
        """Drop a cached entry"""
        return await self.store.remove(key)
