"""HTTP handlers for suggestion operations.

Handlers convert between DTOs (API contracts) and service calls.
They handle HTTP concerns like status codes, validation, and error handling.
"""

from fastapi import HTTPException, status

from trip_suggestions.dto import (
    CacheClearResponse,
    CacheStatsResponse,
    FingerprintResponse,
    HealthCheckResponse,
    InvalidateResponse,
    SuggestionRequestDTO,
    SuggestionResponseDTO,
)
from trip_suggestions.errors import SuggestionUnavailable, UpstreamTimeout
from trip_suggestions.services import SuggestionService


class SuggestionHandler:
    """HTTP handlers for suggestion operations.

    This handler delegates business logic to SuggestionService
    and handles HTTP-specific concerns like:
    - Converting DTOs to entities and back
    - Mapping broker failures to status codes
    - Error handling and responses

    Failure mapping:
        UpstreamTimeout       -> 504 Gateway Timeout
        SuggestionUnavailable -> 503 Service Unavailable
        anything else         -> 500 Internal Server Error
    """

    def __init__(self, suggestion_service: SuggestionService) -> None:
        """Initialize the suggestion handler.

        Args:
            suggestion_service: The suggestion service for business logic (required).
        """
        self._service = suggestion_service

    async def get_suggestions(
        self,
        trip_id: str,
        request: SuggestionRequestDTO,
    ) -> SuggestionResponseDTO:
        """Handle POST /trips/{trip_id}/suggestions requests.

        Args:
            trip_id: Trip the suggestions are for
            request: The suggestion request DTO

        Returns:
            SuggestionResponseDTO with items and provenance

        Raises:
            HTTPException: 504 on agent timeout, 503 when suggestions are
                unavailable, 500 on any other error
        """
        try:
            result = await self._service.get_suggestions(request.to_entity(trip_id=trip_id))
        except UpstreamTimeout as e:
            raise HTTPException(
                status_code=status.HTTP_504_GATEWAY_TIMEOUT,
                detail="The suggestion service took too long to respond. Please try again.",
            ) from e
        except SuggestionUnavailable as e:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Suggestions are temporarily unavailable. Please try again later.",
            ) from e
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to get suggestions: {e}",
            ) from e

        return SuggestionResponseDTO(
            trip_id=trip_id,
            category=result.category,
            source=result.source,
            fingerprint=result.fingerprint,
            created_at=result.created_at,
            items=list(result.items),
        )

    async def fingerprint(self, request: SuggestionRequestDTO) -> FingerprintResponse:
        """Handle POST /suggestions/fingerprint requests."""
        canonical, fingerprint = self._service.fingerprint(request.to_entity())
        return FingerprintResponse(fingerprint=fingerprint, canonical=canonical)

    async def invalidate(self, request: SuggestionRequestDTO) -> InvalidateResponse:
        """Handle POST /suggestions/invalidate requests.

        Raises:
            HTTPException: If the cache backend fails
        """
        try:
            fingerprint, deleted = await self._service.invalidate(request.to_entity())
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to invalidate entry: {e}",
            ) from e

        return InvalidateResponse(fingerprint=fingerprint, deleted=deleted)

    async def clear_cache(self) -> CacheClearResponse:
        """Handle DELETE /suggestions/cache requests.

        Raises:
            HTTPException: If the cache backend fails
        """
        try:
            count = await self._service.clear()
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to clear cache: {e}",
            ) from e

        return CacheClearResponse(
            success=True,
            deleted_count=count,
            message="Cache cleared successfully",
        )

    async def get_stats(self) -> CacheStatsResponse:
        """Handle GET /stats requests.

        Raises:
            HTTPException: If an error occurs while fetching stats
        """
        try:
            stats = await self._service.get_stats()
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to get stats: {e}",
            ) from e

        return CacheStatsResponse(
            backend=stats.get("backend", "unknown"),
            total_entries=stats.get("total_entries", 0),
            ttl_seconds=stats.get("ttl_seconds", 0),
            metrics=stats.get("metrics", {}),
        )

    async def reset_stats(self) -> dict:
        """Handle GET /stats/reset requests."""
        self._service.reset_metrics()
        return {"message": "Broker metrics reset"}

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests.

        Raises:
            HTTPException: 503 if the cache backend is unreachable
        """
        health = await self._service.check_health()

        if not health["cache"]:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Cache backend is unreachable",
            )

        return HealthCheckResponse(
            status="healthy" if health["agent"] else "degraded",
            cache_healthy=health["cache"],
            agent_healthy=health["agent"],
        )
