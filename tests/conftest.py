"""
Shared fixtures and stand-ins for the trip suggestions tests.
"""

import asyncio
from datetime import date, datetime, timedelta, timezone

import pytest

from trip_suggestions.entities import Category, SuggestionRequestEntity

FOOD_REPLY = [
    {"name": "Trattoria da Enzo", "cuisine": "Italian", "price_range": "$$", "rating": 4.6},
    {"name": "Sushi Bar Zen", "cuisine": "Japanese", "price_range": "$$$"},
]


class FakeAgent:
    """Call-counting stand-in for the suggestion agent.

    ``replies`` are consumed in order; the last one repeats. A reply that is
    an exception instance is raised instead of returned.
    """

    def __init__(self, replies=None, delay: float = 0.0, available: bool = True) -> None:
        self.replies = list(replies if replies is not None else [FOOD_REPLY])
        self.delay = delay
        self.available = available
        self.calls: list[tuple[Category, dict]] = []
        self.closed = False

    async def suggest(self, category, request):
        self.calls.append((category, request))
        if self.delay:
            await asyncio.sleep(self.delay)
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, Exception):
            raise reply
        return reply

    async def is_available(self) -> bool:
        return self.available

    async def close(self) -> None:
        self.closed = True


class FakeClock:
    """Manually advanced UTC clock."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 5, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


def make_request(**overrides) -> SuggestionRequestEntity:
    fields = {
        "city": "Rome",
        "country": "Italy",
        "start_date": date(2026, 5, 1),
        "end_date": date(2026, 5, 5),
        "category": Category.FOOD,
    }
    fields.update(overrides)
    return SuggestionRequestEntity(**fields)


@pytest.fixture
def clock():
    return FakeClock()


def request_body(**overrides) -> dict:
    body = {
        "city": "Rome",
        "country": "Italy",
        "start_date": "2026-05-01",
        "end_date": "2026-05-05",
        "category": "food",
    }
    body.update(overrides)
    return body
