from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from trip_suggestions import __version__
from trip_suggestions.api.dependencies import HandlerDep, lifespan
from trip_suggestions.config import settings
from trip_suggestions.dto import (
    CacheClearResponse,
    CacheStatsResponse,
    FingerprintResponse,
    HealthCheckResponse,
    InvalidateResponse,
    SuggestionRequestDTO,
    SuggestionResponseDTO,
)

app = FastAPI(
    title="Trip Suggestions API",
    description="Cached, trip-scoped place/activity/food/shopping suggestions from an AI agent",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Return 422 without echoing inputs, which may not be JSON-serializable (e.g. inf)."""
    errors = [{key: value for key, value in error.items() if key != "input"} for error in exc.errors()]
    return JSONResponse(status_code=422, content={"detail": jsonable_encoder(errors)})


@app.get("/")
async def root() -> dict[str, Any]:
    """Root endpoint with API information."""
    return {
        "name": "Trip Suggestions API",
        "version": __version__,
        "description": "Cached, trip-scoped suggestions from an AI agent",
        "endpoints": {
            "suggestions": "/trips/{trip_id}/suggestions",
            "fingerprint": "/suggestions/fingerprint",
            "invalidate": "/suggestions/invalidate",
            "cache": "/suggestions/cache",
            "stats": "/stats",
            "health": "/health",
            "docs": "/docs",
        },
    }


@app.get("/health", response_model=HealthCheckResponse)
async def health(handler: HandlerDep) -> HealthCheckResponse:
    """Health check endpoint."""
    return await handler.health_check()


@app.post("/trips/{trip_id}/suggestions", response_model=SuggestionResponseDTO)
async def get_suggestions(
    trip_id: str,
    request: SuggestionRequestDTO,
    handler: HandlerDep,
) -> SuggestionResponseDTO:
    """
    Get suggestions for a trip.

    Args:
        trip_id: Trip the suggestions are for.
        request: Destination, dates, category, and preferences.

    Returns:
        Suggestions tagged with their source ('cache' or 'live').
    """
    return await handler.get_suggestions(trip_id, request)


@app.post("/suggestions/fingerprint", response_model=FingerprintResponse)
async def fingerprint(request: SuggestionRequestDTO, handler: HandlerDep) -> FingerprintResponse:
    """Show the canonical form and cache fingerprint of a request."""
    return await handler.fingerprint(request)


@app.post("/suggestions/invalidate", response_model=InvalidateResponse)
async def invalidate(request: SuggestionRequestDTO, handler: HandlerDep) -> InvalidateResponse:
    """Drop the cached suggestions for a request."""
    return await handler.invalidate(request)


@app.delete("/suggestions/cache", response_model=CacheClearResponse)
async def clear_cache(handler: HandlerDep) -> CacheClearResponse:
    """Clear all cached suggestions."""
    return await handler.clear_cache()


@app.get("/stats", response_model=CacheStatsResponse)
async def get_stats(handler: HandlerDep) -> CacheStatsResponse:
    """Get cache statistics and broker counters."""
    return await handler.get_stats()


@app.get("/stats/reset", response_model=dict[str, str])
async def reset_stats(handler: HandlerDep) -> dict[str, str]:
    """Reset broker counters."""
    return await handler.reset_stats()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "trip_suggestions.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
