"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
They are used for request/response validation and serialization.

Internal domain logic should use entities from the entities package.
"""

from .requests import SuggestionRequestDTO
from .responses import (
    CacheClearResponse,
    CacheStatsResponse,
    FingerprintResponse,
    HealthCheckResponse,
    InvalidateResponse,
    SuggestionResponseDTO,
)

__all__ = [
    "SuggestionRequestDTO",
    "SuggestionResponseDTO",
    "FingerprintResponse",
    "InvalidateResponse",
    "CacheClearResponse",
    "CacheStatsResponse",
    "HealthCheckResponse",
]
