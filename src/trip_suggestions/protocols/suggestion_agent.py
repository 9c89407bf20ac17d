"""Suggestion agent protocol.

Defines the interface for the external AI service that generates
suggestions for a canonical request.
"""

from typing import Any, Protocol, runtime_checkable

from trip_suggestions.entities import Category


@runtime_checkable
class SuggestionAgent(Protocol):
    """Protocol for suggestion generators."""

    async def suggest(self, category: Category, request: dict[str, Any]) -> Any:
        """Ask the agent for suggestions.

        Args:
            category: Suggestion category
            request: Canonical request dict

        Returns:
            The decoded, not yet validated reply

        Raises:
            UpstreamTimeout: If the agent does not answer in time
            UpstreamTransientError: On network failures or retryable statuses
            UpstreamRejectedRequest: If the agent refuses the request
            UpstreamInvalidResponse: If the reply cannot be decoded
        """
        ...

    async def is_available(self) -> bool:
        """Check if the agent is reachable."""
        ...

    async def close(self) -> None:
        """Release any held connections."""
        ...
