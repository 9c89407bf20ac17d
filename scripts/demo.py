#!/usr/bin/env python3
"""
Demo script for the trip suggestions broker.

Runs the broker against the in-memory cache and a canned local agent, so
neither Redis nor the AI service is needed.
"""

import asyncio
import time
from datetime import date

from trip_suggestions import (
    Category,
    InMemorySuggestionCacheRepository,
    SuggestionRequestEntity,
    SuggestionService,
    SuggestionUnavailable,
    canonicalize,
)

CANNED_REPLIES = {
    Category.FOOD: [
        {"name": "Trattoria da Enzo", "cuisine": "Italian", "price_range": "$$"},
        {"name": "Sushi Bar Zen", "cuisine": "Japanese", "price_range": "$$$"},
    ],
    Category.PLACES: [
        {"name": "Pantheon", "description": "Roman temple, now a church", "rating": 4.8},
        {"name": "Villa Borghese", "description": "Landscape garden"},
    ],
}


class CannedAgent:
    """Local agent that answers from CANNED_REPLIES after a short delay."""

    def __init__(self, delay: float = 0.3, broken: bool = False) -> None:
        self.delay = delay
        self.broken = broken
        self.calls = 0

    async def suggest(self, category, request):
        self.calls += 1
        await asyncio.sleep(self.delay)
        if self.broken:
            return {"items": [{"description": "missing name"}]}
        return CANNED_REPLIES.get(category, [])

    async def is_available(self) -> bool:
        return True

    async def close(self) -> None:
        pass


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def rome_request(**overrides) -> SuggestionRequestEntity:
    fields = {
        "city": "Rome",
        "country": "Italy",
        "start_date": date(2026, 5, 1),
        "end_date": date(2026, 5, 5),
        "category": Category.FOOD,
        "cuisines": ("Italian", "Japanese"),
    }
    fields.update(overrides)
    return SuggestionRequestEntity(**fields)


def demo_canonicalization() -> None:
    """Show how differently written requests collapse to one form."""
    print_section("Canonicalization")

    service = SuggestionService(repository=InMemorySuggestionCacheRepository(), agent=CannedAgent())
    requests = [
        rome_request(),
        rome_request(city="rome", cuisines=("Japanese", "Italian")),
        rome_request(city="  ROME ", cuisines=("japanese", "italian", "Italian")),
    ]

    for request in requests:
        _, fingerprint = service.fingerprint(request)
        print(f"\n  city={request.city!r} cuisines={list(request.cuisines)}")
        print(f"    fingerprint: {fingerprint[:16]}...")

    print(f"\n  Canonical form: {canonicalize(requests[0])}")


async def demo_cache_flow() -> None:
    """Show a live call followed by cache hits."""
    print_section("Cache Flow")

    agent = CannedAgent()
    service = SuggestionService(repository=InMemorySuggestionCacheRepository(), agent=agent, ttl=60)

    for request in (rome_request(), rome_request(city="rome", cuisines=("Japanese", "Italian"))):
        start = time.time()
        response = await service.get_suggestions(request)
        duration = (time.time() - start) * 1000
        names = ", ".join(item["name"] for item in response.items)
        print(f"\n  {response.source.value.upper():<5} {duration:7.1f}ms  {names}")

    print(f"\n  Agent calls: {agent.calls}")
    print(f"  Metrics: {service.metrics.to_dict()}")


async def demo_invalid_reply() -> None:
    """Show the single retry on a malformed reply."""
    print_section("Malformed Agent Reply")

    agent = CannedAgent(delay=0.05, broken=True)
    service = SuggestionService(repository=InMemorySuggestionCacheRepository(), agent=agent)

    try:
        await service.get_suggestions(rome_request(category=Category.PLACES))
    except SuggestionUnavailable as e:
        print(f"\n  ✗ {type(e).__name__}: {e}")
    print(f"  Agent calls: {agent.calls} (one retry)")


def main() -> None:
    """Run all demos."""
    print("\n🚀 Trip Suggestions Demo")

    demo_canonicalization()
    asyncio.run(demo_cache_flow())
    asyncio.run(demo_invalid_reply())

    print("\n✓ Demo complete")


if __name__ == "__main__":
    main()
