"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from trip_suggestions.config import settings
from trip_suggestions.handlers import SuggestionHandler
from trip_suggestions.logging_config import configure_logging
from trip_suggestions.protocols import SuggestionCacheStore
from trip_suggestions.repositories import (
    HttpSuggestionAgent,
    InMemorySuggestionCacheRepository,
    RedisSuggestionCacheRepository,
)
from trip_suggestions.services import SuggestionService

logger = logging.getLogger(__name__)


def get_handler(request: Request) -> SuggestionHandler:
    """Dependency injection for SuggestionHandler from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The SuggestionHandler instance from app.state

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "suggestion_handler", None)
    if handler is None:
        raise RuntimeError("SuggestionHandler not initialized. Check lifespan setup.")
    return handler


def build_repository() -> SuggestionCacheStore:
    """Create the cache store selected by ``CACHE_BACKEND``."""
    if settings.uses_redis:
        return RedisSuggestionCacheRepository.create()
    return InMemorySuggestionCacheRepository()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores in app.state:
    1. Repository and agent (data access) - created explicitly
    2. Service (business logic) - stored in app.state.suggestion_service
    3. Handler (HTTP endpoints) - stored in app.state.suggestion_handler

    Args:
        app: The FastAPI application instance

    Yields:
        None

    Cleanup:
        Closes connections and removes all services from app.state on shutdown
    """
    configure_logging(settings.log_level)

    repository = build_repository()
    agent = HttpSuggestionAgent.create()

    suggestion_service = SuggestionService.create(repository=repository, agent=agent)
    suggestion_handler = SuggestionHandler(suggestion_service=suggestion_service)

    app.state.suggestion_service = suggestion_service
    app.state.suggestion_handler = suggestion_handler

    logger.info(
        "Suggestion service initialized (backend=%s, ttl=%ss, agent=%s)",
        settings.cache_backend,
        suggestion_service.ttl,
        agent.base_url,
    )

    yield

    await suggestion_service.close()
    del app.state.suggestion_handler
    del app.state.suggestion_service
    logger.info("Suggestion service shut down")


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[SuggestionHandler, Depends(get_handler)]
