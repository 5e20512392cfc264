"""
Durable Key-Value Store
Thin Redis wrapper; failures are logged and absorbed here
"""
import json
import logging
from typing import Any, Optional

import redis.asyncio as redis

from movieapp.services.errors import SerializationError

logger = logging.getLogger(__name__)


class KeyValueStore:
    """
    Async key-value store backed by Redis.

    Values are JSON documents. No operation raises: callers see a failed
    write as a miss on the next read.
    """

    def __init__(
        self,
        url: str = "redis://localhost:6379/0",
        prefix: str = "movieapp_",
        client: Optional[redis.Redis] = None,
    ):
        self.url = url
        self.prefix = prefix
        self._client = client
        self._owns_client = client is None

    async def get_client(self) -> redis.Redis:
        """Get or create Redis client"""
        if self._client is None:
            self._client = redis.from_url(
                self.url,
                encoding="utf-8",
                decode_responses=True,
            )
        return self._client

    @staticmethod
    def _encode(value: Any) -> str:
        try:
            return json.dumps(value)
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Value is not JSON serializable: {e}") from e

    @staticmethod
    def _decode(raw: str) -> Any:
        try:
            return json.loads(raw)
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Stored value is not valid JSON: {e}") from e

    async def get(self, key: str) -> Optional[Any]:
        """
        Get value from the store

        Args:
            key: Storage key

        Returns:
            Stored value or None if absent or unreadable
        """
        try:
            client = await self.get_client()
            raw = await client.get(key)
            if raw is None:
                return None
            return self._decode(raw)
        except SerializationError as e:
            logger.warning(f"Store get could not decode key {key}: {e}")
            return None
        except Exception as e:
            logger.error(f"Store get error for key {key}: {e}")
            return None

    async def set(self, key: str, value: Any) -> bool:
        """
        Set value in the store

        Args:
            key: Storage key
            value: Value to store (must be JSON serializable)

        Returns:
            True if successful, False otherwise
        """
        try:
            serialized = self._encode(value)
            client = await self.get_client()
            await client.set(key, serialized)
            return True
        except SerializationError as e:
            logger.warning(f"Store set skipped for key {key}: {e}")
            return False
        except Exception as e:
            logger.error(f"Store set error for key {key}: {e}")
            return False

    async def remove(self, key: str) -> bool:
        """Remove a key; True if the call reached the backend"""
        try:
            client = await self.get_client()
            await client.delete(key)
            return True
        except Exception as e:
            logger.error(f"Store remove error for key {key}: {e}")
            return False

    async def clear(self) -> int:
        """
        Remove every key under this store's prefix

        Returns:
            Number of keys removed
        """
        removed = 0
        try:
            client = await self.get_client()
            async for key in client.scan_iter(match=f"{self.prefix}*"):
                removed += await client.delete(key)
        except Exception as e:
            logger.error(f"Store clear error for prefix {self.prefix}: {e}")
        return removed

    async def close(self):
        """Close Redis connection"""
        if self._client is not None and self._owns_client:
            try:
                await self._client.aclose()
            except Exception as e:
                logger.warning(f"Store close error: {e}")
            self._client = None
