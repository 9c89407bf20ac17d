"""Redis implementation of SuggestionCacheStore.

Each entry is a Redis hash at ``{prefix}:{fingerprint}``. Redis is told to
expire the key at the entry's expiry time, but lookups still compare
``expires_at`` against the caller's clock so that an entry Redis has not yet
dropped is never served late.
"""

import json
import logging
import math
from datetime import datetime, timezone

import redis.asyncio as redis

from trip_suggestions.config import get_redis_client, settings
from trip_suggestions.entities import CacheEntryEntity, Category

logger = logging.getLogger(__name__)


class RedisSuggestionCacheRepository:
    """Redis hash-per-entry suggestion cache.

    This class satisfies the SuggestionCacheStore protocol through
    structural typing - no explicit inheritance needed.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        key_prefix: str | None = None,
    ) -> None:
        """Initialize the Redis suggestion cache repository.

        Args:
            redis_client: Async Redis client instance. If None, creates default.
            key_prefix: Prefix for entry keys. Defaults to settings.
        """
        self._client = redis_client or get_redis_client()
        self._prefix = key_prefix or settings.cache_key_prefix

    @classmethod
    def create(cls, key_prefix: str | None = None) -> "RedisSuggestionCacheRepository":
        """Factory method to create RedisSuggestionCacheRepository with defaults.

        Args:
            key_prefix: Redis key prefix. If None, uses settings.

        Returns:
            Configured RedisSuggestionCacheRepository
        """
        return cls(key_prefix=key_prefix)

    def _key(self, fingerprint: str) -> str:
        return f"{self._prefix}:{fingerprint}"

    async def lookup(self, fingerprint: str, now: datetime) -> CacheEntryEntity | None:
        """Find the live entry for a fingerprint.

        Args:
            fingerprint: Request fingerprint
            now: Reference time for the expiry predicate

        Returns:
            The entry if present and not expired, None otherwise
        """
        data = await self._client.hgetall(self._key(fingerprint))
        if not data:
            return None

        try:
            expires_at = float(data["expires_at"])
            if expires_at <= now.timestamp():
                return None

            return CacheEntryEntity(
                fingerprint=data["fingerprint"],
                category=Category(data["category"]),
                payload=json.loads(data["payload"]),
                created_at=datetime.fromtimestamp(float(data["created_at"]), tz=timezone.utc),
                expires_at=datetime.fromtimestamp(expires_at, tz=timezone.utc),
            )
        except (KeyError, ValueError) as e:
            logger.warning("Ignoring unreadable cache entry %s: %s", fingerprint, e)
            return None

    async def insert(self, entry: CacheEntryEntity) -> None:
        """Write an entry, replacing any entry with the same fingerprint.

        Args:
            entry: The entry to store
        """
        key = self._key(entry.fingerprint)

        pipe = self._client.pipeline()
        pipe.delete(key)
        pipe.hset(
            key,
            mapping={
                "fingerprint": entry.fingerprint,
                "category": entry.category.value,
                "payload": json.dumps(entry.payload, ensure_ascii=False),
                "created_at": str(entry.created_at.timestamp()),
                "expires_at": str(entry.expires_at.timestamp()),
            },
        )
        pipe.expireat(key, math.ceil(entry.expires_at.timestamp()))
        await pipe.execute()

    async def delete(self, fingerprint: str) -> bool:
        """Delete the entry for a fingerprint.

        Returns:
            True if deleted, False otherwise
        """
        result = await self._client.delete(self._key(fingerprint))
        return result > 0

    async def clear_all(self) -> int:
        """Clear all entries under the key prefix.

        Returns:
            Number of entries deleted
        """
        count = 0
        async for key in self._client.scan_iter(match=f"{self._prefix}:*"):
            count += await self._client.delete(key)
        return count

    async def count_all(self) -> int:
        """Count entries under the key prefix.

        Returns:
            Total number of stored entries
        """
        count = 0
        async for _ in self._client.scan_iter(match=f"{self._prefix}:*"):
            count += 1
        return count

    async def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(await self._client.ping())
        except Exception as e:
            logger.warning("Redis health check failed: %s", e)
            return False

    async def get_stats(self) -> dict:
        """Get repository statistics.

        Returns:
            Dictionary with stats
        """
        return {
            "backend": "redis",
            "key_prefix": self._prefix,
            "total_entries": await self.count_all(),
        }

    async def close(self) -> None:
        """Close the Redis connection pool."""
        await self._client.aclose()
