"""Suggestion response domain entity."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from .suggestion_request import Category


class SuggestionSource(str, Enum):
    """Where a response came from."""

    CACHE = "cache"
    LIVE = "live"


@dataclass(frozen=True)
class SuggestionResponseEntity:
    """Domain entity returned by the broker.

    Attributes:
        category: Suggestion category
        items: Ordered suggestion items, each with at least a ``name``
        source: ``cache`` for a hit, ``live`` for a fresh agent reply
        fingerprint: Fingerprint of the request that produced it
        created_at: When the underlying agent reply was obtained
    """

    category: Category
    items: tuple[dict[str, Any], ...]
    source: SuggestionSource
    fingerprint: str
    created_at: datetime

    @property
    def is_cached(self) -> bool:
        return self.source is SuggestionSource.CACHE
