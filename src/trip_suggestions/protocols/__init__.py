"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (Redis → in-memory, HTTP agent → fake agent)
- Unit testing with stand-in implementations
- Clear separation of concerns

Usage:
    ```python
    from trip_suggestions.protocols import SuggestionAgent, SuggestionCacheStore

    store: SuggestionCacheStore = RedisSuggestionCacheRepository.create()
    store: SuggestionCacheStore = InMemorySuggestionCacheRepository()
    ```
"""

from .cache_store import SuggestionCacheStore
from .suggestion_agent import SuggestionAgent

__all__ = [
    "SuggestionAgent",
    "SuggestionCacheStore",
]
