"""Service layer for business logic.

This layer contains the suggestion broker. Services depend on protocols
(interfaces), not concrete implementations, making them testable and
flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access / Agent)

Usage:
    ```python
    from trip_suggestions.services import SuggestionService

    service = SuggestionService.create(repository=store, agent=agent)
    ```
"""

from .suggestion_service import SuggestionService

__all__ = [
    "SuggestionService",
]
