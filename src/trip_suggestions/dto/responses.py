"""Response DTOs for API endpoints."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from trip_suggestions.entities import Category, SuggestionSource


class SuggestionResponseDTO(BaseModel):
    """Response DTO for a suggestion request."""

    trip_id: str | None = Field(None, description="Trip the suggestions were requested for")
    category: Category = Field(..., description="Suggestion category")
    source: SuggestionSource = Field(..., description="'cache' for a hit, 'live' for a fresh reply")
    fingerprint: str = Field(..., description="Fingerprint of the canonical request")
    created_at: datetime = Field(..., description="When the agent reply was obtained")
    items: list[dict[str, Any]] = Field(
        ...,
        description="Ordered suggestions; each has at least a name",
        min_length=1,
    )


class FingerprintResponse(BaseModel):
    """Response DTO for the fingerprint debug endpoint."""

    fingerprint: str = Field(..., description="SHA-256 hex digest")
    canonical: dict[str, Any] = Field(..., description="Canonical form of the request")


class InvalidateResponse(BaseModel):
    """Response DTO for invalidating a single cached request."""

    fingerprint: str = Field(..., description="Fingerprint of the canonical request")
    deleted: bool = Field(..., description="Whether an entry was removed")


class CacheClearResponse(BaseModel):
    """Response DTO for clearing the cache."""

    success: bool = Field(..., description="Whether the operation succeeded")
    deleted_count: int = Field(..., description="Number of entries removed", ge=0)
    message: str = Field(..., description="Human-readable status message")


class CacheStatsResponse(BaseModel):
    """Response DTO for cache statistics."""

    backend: str = Field(..., description="Cache backend name")
    total_entries: int = Field(..., description="Stored entries, expired ones included", ge=0)
    ttl_seconds: int = Field(..., description="Time-to-live for cache entries in seconds", ge=0)
    metrics: dict[str, float | int] = Field(
        default_factory=dict,
        description="Broker counters since start or last reset",
    )


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy', 'degraded' or 'unhealthy'")
    cache_healthy: bool = Field(..., description="Whether the cache backend is reachable")
    agent_healthy: bool | None = Field(
        None,
        description="Whether the suggestion agent is reachable",
    )
