"""Cache entry domain entity."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from .suggestion_request import Category


@dataclass(frozen=True)
class CacheEntryEntity:
    """Domain entity for a cached agent reply.

    Entries are written once after a successful upstream call and never
    mutated. An entry is only visible while ``now < expires_at``; stores
    filter on that predicate instead of relying on eviction.

    Attributes:
        fingerprint: SHA-256 hex digest of the canonical request
        category: Suggestion category of the cached reply
        payload: Validated suggestion items
        created_at: When this entry was written (UTC)
        expires_at: When this entry stops being visible (UTC)
    """

    fingerprint: str
    category: Category
    payload: list[dict[str, Any]]
    created_at: datetime
    expires_at: datetime

    def is_live(self, now: datetime) -> bool:
        """Check whether the entry is still visible at ``now``."""
        return now < self.expires_at
