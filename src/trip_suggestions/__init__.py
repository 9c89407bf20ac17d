"""Trip Suggestions - cached AI suggestions for trip planning.

This package provides a layered architecture around the suggestion broker:

Layers:
    - protocols: Interface contracts (SuggestionCacheStore, SuggestionAgent)
    - repositories: Redis/in-memory stores and the HTTP agent client
    - services: Business logic (the broker)
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from trip_suggestions.repositories import HttpSuggestionAgent, InMemorySuggestionCacheRepository
    from trip_suggestions.services import SuggestionService

    service = SuggestionService.create(
        repository=InMemorySuggestionCacheRepository(),
        agent=HttpSuggestionAgent.create(),
    )
    response = await service.get_suggestions(request)
    ```

For HTTP API:
    ```python
    from trip_suggestions.api.app import app
    ```
"""

__version__ = "0.1.0"

from trip_suggestions.config import get_redis_client, settings
from trip_suggestions.dto import SuggestionRequestDTO, SuggestionResponseDTO
from trip_suggestions.entities import (
    CacheEntryEntity,
    Category,
    SuggestionRequestEntity,
    SuggestionResponseEntity,
    SuggestionSource,
)
from trip_suggestions.errors import (
    SuggestionError,
    SuggestionUnavailable,
    UpstreamInvalidResponse,
    UpstreamTimeout,
)
from trip_suggestions.fingerprint import canonicalize, compute_fingerprint
from trip_suggestions.handlers import SuggestionHandler
from trip_suggestions.protocols import SuggestionAgent, SuggestionCacheStore
from trip_suggestions.repositories import (
    HttpSuggestionAgent,
    InMemorySuggestionCacheRepository,
    RedisSuggestionCacheRepository,
)
from trip_suggestions.services import SuggestionService

__all__ = [
    "__version__",
    # Configuration
    "settings",
    "get_redis_client",
    # Protocols (interfaces)
    "SuggestionAgent",
    "SuggestionCacheStore",
    # Services (business logic)
    "SuggestionService",
    "canonicalize",
    "compute_fingerprint",
    # Handlers (HTTP)
    "SuggestionHandler",
    # Repositories (data access)
    "HttpSuggestionAgent",
    "InMemorySuggestionCacheRepository",
    "RedisSuggestionCacheRepository",
    # Entities (domain models)
    "CacheEntryEntity",
    "Category",
    "SuggestionRequestEntity",
    "SuggestionResponseEntity",
    "SuggestionSource",
    # Errors
    "SuggestionError",
    "SuggestionUnavailable",
    "UpstreamInvalidResponse",
    "UpstreamTimeout",
    # DTOs (API contracts)
    "SuggestionRequestDTO",
    "SuggestionResponseDTO",
]
