"""In-memory implementation of SuggestionCacheStore.

Used for local development (``CACHE_BACKEND=memory``) and tests. Expiry is
enforced by the lookup predicate; entries that are no longer live are
purged whenever a new entry is written.
"""

from datetime import datetime

from trip_suggestions.entities import CacheEntryEntity


class InMemorySuggestionCacheRepository:
    """Dict-backed suggestion cache.

    This class satisfies the SuggestionCacheStore protocol through
    structural typing - no explicit inheritance needed.
    """

    def __init__(self) -> None:
        self._entries: dict[str, CacheEntryEntity] = {}

    async def lookup(self, fingerprint: str, now: datetime) -> CacheEntryEntity | None:
        entry = self._entries.get(fingerprint)
        if entry is None or not entry.is_live(now):
            return None
        return entry

    async def insert(self, entry: CacheEntryEntity) -> None:
        self.purge_expired(entry.created_at)
        # Last write wins for duplicate fingerprints
        self._entries[entry.fingerprint] = entry

    async def delete(self, fingerprint: str) -> bool:
        return self._entries.pop(fingerprint, None) is not None

    async def clear_all(self) -> int:
        count = len(self._entries)
        self._entries.clear()
        return count

    async def count_all(self) -> int:
        return len(self._entries)

    async def health_check(self) -> bool:
        return True

    async def get_stats(self) -> dict:
        return {
            "backend": "memory",
            "total_entries": len(self._entries),
        }

    def purge_expired(self, now: datetime) -> int:
        """Physically remove entries that are no longer live.

        Args:
            now: Reference time for the expiry predicate

        Returns:
            Number of entries removed
        """
        expired = [fp for fp, entry in self._entries.items() if not entry.is_live(now)]
        for fingerprint in expired:
            del self._entries[fingerprint]
        return len(expired)

    async def close(self) -> None:
        """Nothing to release; present for parity with the Redis store."""
