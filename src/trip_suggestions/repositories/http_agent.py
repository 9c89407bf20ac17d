"""HTTP client for the external suggestion agent.

The agent is an AI service that accepts a canonical request and returns a
JSON list of suggestion items. Endpoints:

- ``POST /v1/suggestions`` with ``{"category": ..., "request": {...}}``
- ``GET /health``

Transport-level problems are translated into the broker's upstream error
taxonomy here, so the service layer never sees ``httpx`` exceptions.
"""

from typing import Any

import httpx

from trip_suggestions.config import settings
from trip_suggestions.entities import Category
from trip_suggestions.errors import (
    UpstreamInvalidResponse,
    UpstreamRejectedRequest,
    UpstreamTimeout,
    UpstreamTransientError,
)

RETRYABLE_STATUS_CODES = {429}


class HttpSuggestionAgent:
    """httpx-based implementation of the SuggestionAgent protocol.

    This class satisfies the SuggestionAgent protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        agent = HttpSuggestionAgent.create(base_url="http://localhost:8001")
        items = await agent.suggest(Category.FOOD, canonical_request)
        await agent.close()
        ```
    """

    SUGGESTIONS_PATH = "/v1/suggestions"
    HEALTH_PATH = "/health"

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the HTTP suggestion agent.

        Args:
            base_url: Agent API base URL. Defaults to settings.agent_base_url.
            api_key: Bearer token sent to the agent. Defaults to settings.agent_api_key.
            timeout: Request timeout in seconds. Defaults to settings.agent_timeout.
            client: Pre-built async client (e.g. with a mock transport).
        """
        self._base_url = (base_url or settings.agent_base_url).rstrip("/")
        self._api_key = api_key if api_key is not None else settings.agent_api_key
        self._timeout = settings.agent_timeout if timeout is None else timeout
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client.

        Returns:
            The httpx.AsyncClient instance
        """
        if self._client is None:
            headers = {"Accept": "application/json"}
            if self._api_key:
                headers["Authorization"] = f"Bearer {self._api_key}"
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                headers=headers,
                limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
            )
        return self._client

    @classmethod
    def create(
        cls,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
    ) -> "HttpSuggestionAgent":
        """Factory method to create HttpSuggestionAgent with defaults.

        Args:
            base_url: Agent API URL. If None, uses settings.
            api_key: Agent API key. If None, uses settings.
            timeout: Request timeout. If None, uses settings.

        Returns:
            Configured HttpSuggestionAgent
        """
        return cls(base_url=base_url, api_key=api_key, timeout=timeout)

    @property
    def base_url(self) -> str:
        return self._base_url

    async def suggest(self, category: Category, request: dict[str, Any]) -> Any:
        """Ask the agent for suggestions.

        Args:
            category: Suggestion category
            request: Canonical request dict

        Returns:
            The decoded JSON reply (not yet shape-validated)

        Raises:
            UpstreamTimeout: If the agent does not answer in time
            UpstreamTransientError: On connection errors, 5xx or 429
            UpstreamRejectedRequest: On any other 4xx
            UpstreamInvalidResponse: If the body is not JSON
        """
        url = f"{self._base_url}{self.SUGGESTIONS_PATH}"
        payload = {"category": Category(category).value, "request": request}

        try:
            response = await self.client.post(url, json=payload)
        except httpx.TimeoutException as e:
            raise UpstreamTimeout(f"Suggestion agent timed out after {self._timeout}s") from e
        except httpx.TransportError as e:
            raise UpstreamTransientError(f"Suggestion agent unreachable: {e}") from e
        except (TypeError, ValueError) as e:
            # Body could not be encoded as JSON (e.g. non-finite floats)
            raise UpstreamRejectedRequest(
                f"Could not encode request for suggestion agent: {e}"
            ) from e

        status = response.status_code
        if status >= 500 or status in RETRYABLE_STATUS_CODES:
            raise UpstreamTransientError(f"Suggestion agent returned HTTP {status}")
        if status >= 400:
            raise UpstreamRejectedRequest(
                f"Suggestion agent rejected the request: HTTP {status}",
                status_code=status,
            )

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamInvalidResponse("Suggestion agent returned a non-JSON body") from e

    async def is_available(self) -> bool:
        """Check if the agent is reachable.

        Returns:
            True if the health endpoint answers 2xx, False otherwise
        """
        try:
            response = await self.client.get(f"{self._base_url}{self.HEALTH_PATH}")
            return response.is_success
        except httpx.HTTPError:
            return False

    async def close(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None
