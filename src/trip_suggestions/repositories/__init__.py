"""Repository layer for data access.

This layer abstracts external dependencies (Redis, the suggestion agent)
behind protocol-based interfaces. This enables:
- Easy swapping of implementations (Redis → in-memory, etc.)
- Unit testing with stand-in implementations
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from trip_suggestions.protocols import SuggestionAgent, SuggestionCacheStore

from .http_agent import HttpSuggestionAgent
from .memory_repository import InMemorySuggestionCacheRepository
from .redis_repository import RedisSuggestionCacheRepository

__all__ = [
    "SuggestionAgent",
    "SuggestionCacheStore",
    "HttpSuggestionAgent",
    "InMemorySuggestionCacheRepository",
    "RedisSuggestionCacheRepository",
]
