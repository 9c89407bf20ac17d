"""Suggestion cache storage protocol.

Defines the interface for any backend that keeps agent replies keyed by
request fingerprint. Lookups must be expiry-aware: an entry whose
``expires_at`` is not in the future is a miss even if it is still stored.

Implementations include:
- Redis (default)
- In-memory dict (development and tests)
"""

from datetime import datetime
from typing import Protocol, runtime_checkable

from trip_suggestions.entities import CacheEntryEntity


@runtime_checkable
class SuggestionCacheStore(Protocol):
    """Protocol for suggestion cache backends.

    Any type that implements these methods satisfies the protocol, no
    explicit inheritance needed.
    """

    async def lookup(self, fingerprint: str, now: datetime) -> CacheEntryEntity | None:
        """Find the live entry for a fingerprint.

        Args:
            fingerprint: Request fingerprint
            now: Reference time for the expiry predicate

        Returns:
            The entry if present and ``now < expires_at``, None otherwise
        """
        ...

    async def insert(self, entry: CacheEntryEntity) -> None:
        """Write an entry, replacing any entry with the same fingerprint.

        Args:
            entry: The entry to store
        """
        ...

    async def delete(self, fingerprint: str) -> bool:
        """Delete the entry for a fingerprint.

        Returns:
            True if an entry was deleted, False otherwise
        """
        ...

    async def clear_all(self) -> int:
        """Clear all entries.

        Returns:
            Number of entries deleted
        """
        ...

    async def count_all(self) -> int:
        """Count stored entries, including expired ones not yet removed."""
        ...

    async def health_check(self) -> bool:
        """Check if the backend is accessible."""
        ...

    async def get_stats(self) -> dict:
        """Get backend statistics (implementation-specific)."""
        ...
