"""Suggestion broker service.

This service orchestrates a suggestion request by coordinating the cache
store (data access) and the suggestion agent (generation):

1. Canonicalize and fingerprint the request
2. Look up a live cache entry for the fingerprint
3. On a miss, call the agent (bounded by a timeout) and validate the reply,
   retrying once on an invalid reply or a transient failure
4. Persist the validated reply with an expiry of now + TTL
"""

import asyncio
import copy
import logging
import time
from collections.abc import Awaitable, Callable
from datetime import datetime, timedelta, timezone
from typing import Any

from trip_suggestions.config import settings
from trip_suggestions.entities import (
    CacheEntryEntity,
    Category,
    SuggestionRequestEntity,
    SuggestionResponseEntity,
    SuggestionSource,
)
from trip_suggestions.errors import (
    RETRYABLE_ERRORS,
    SuggestionUnavailable,
    UpstreamRejectedRequest,
    UpstreamTimeout,
)
from trip_suggestions.fingerprint import fingerprint_request
from trip_suggestions.models import BrokerMetrics
from trip_suggestions.protocols import SuggestionAgent, SuggestionCacheStore
from trip_suggestions.validation import parse_suggestions

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SuggestionService:
    """Core suggestion broker.

    This service depends on PROTOCOLS, not concrete implementations:
    - SuggestionCacheStore: can be Redis, in-memory, etc.
    - SuggestionAgent: can be the HTTP agent or any stand-in

    Concurrent calls for the same fingerprint are not coordinated; both may
    miss and both may write, and the last write wins.

    Example:
        ```python
        from trip_suggestions.repositories import (
            HttpSuggestionAgent,
            RedisSuggestionCacheRepository,
        )
        from trip_suggestions.services import SuggestionService

        service = SuggestionService.create(
            repository=RedisSuggestionCacheRepository.create(),
            agent=HttpSuggestionAgent.create(),
        )
        response = await service.get_suggestions(request)
        ```
    """

    MAX_ATTEMPTS = 2

    def __init__(
        self,
        repository: SuggestionCacheStore,
        agent: SuggestionAgent,
        ttl: int | None = None,
        agent_timeout: float | None = None,
        cache_timeout: float | None = None,
        budget_precision: int | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the suggestion service.

        Args:
            repository: Cache storage backend (required).
            agent: Suggestion generator (required).
            ttl: Lifetime of cache entries in seconds. Defaults to settings.
            agent_timeout: Upper bound for one agent call in seconds. Defaults to settings.
            cache_timeout: Upper bound for one cache store call in seconds. Defaults to settings.
            budget_precision: Decimal places kept for budgets. Defaults to settings.
            clock: Returns the current UTC time. Defaults to ``datetime.now(timezone.utc)``.
        """
        self._repository = repository
        self._agent = agent
        self._ttl = settings.suggestion_cache_ttl if ttl is None else ttl
        self._agent_timeout = settings.agent_timeout if agent_timeout is None else agent_timeout
        self._cache_timeout = settings.cache_timeout if cache_timeout is None else cache_timeout
        self._precision = (
            settings.budget_precision if budget_precision is None else budget_precision
        )
        self._clock = clock or utcnow
        self._metrics = BrokerMetrics()

    @classmethod
    def create(
        cls,
        repository: SuggestionCacheStore,
        agent: SuggestionAgent,
        ttl: int | None = None,
        agent_timeout: float | None = None,
        cache_timeout: float | None = None,
    ) -> "SuggestionService":
        """Factory method to create SuggestionService with settings defaults.

        Args:
            repository: Cache storage backend (required).
            agent: Suggestion generator (required).
            ttl: Entry TTL in seconds. If None, uses settings.
            agent_timeout: Agent call timeout. If None, uses settings.
            cache_timeout: Cache call timeout. If None, uses settings.

        Returns:
            Configured SuggestionService instance
        """
        return cls(
            repository=repository,
            agent=agent,
            ttl=ttl,
            agent_timeout=agent_timeout,
            cache_timeout=cache_timeout,
        )

    def fingerprint(self, request: SuggestionRequestEntity) -> tuple[dict[str, Any], str]:
        """Canonicalize and fingerprint a request.

        Returns:
            Tuple of (canonical dict, fingerprint)
        """
        return fingerprint_request(request, self._precision)

    async def get_suggestions(self, request: SuggestionRequestEntity) -> SuggestionResponseEntity:
        """Get suggestions for a request, from cache when possible.

        Args:
            request: The suggestion request

        Returns:
            SuggestionResponseEntity tagged ``cache`` or ``live``

        Raises:
            UpstreamTimeout: If the agent did not answer in time
            SuggestionUnavailable: If no valid reply could be obtained
        """
        canonical, fingerprint = self.fingerprint(request)

        entry = await self._lookup(fingerprint, self._clock())
        if entry is not None:
            self._metrics.record_hit()
            logger.debug("Cache hit for %s (%s)", fingerprint, entry.category.value)
            return SuggestionResponseEntity(
                category=entry.category,
                items=tuple(copy.deepcopy(entry.payload)),
                source=SuggestionSource.CACHE,
                fingerprint=fingerprint,
                created_at=entry.created_at,
            )

        self._metrics.record_miss()
        logger.debug("Cache miss for %s (%s)", fingerprint, request.category.value)

        items = await self._fetch(request.category, canonical, fingerprint)

        created_at = self._clock()
        await self._persist(
            CacheEntryEntity(
                fingerprint=fingerprint,
                category=request.category,
                payload=items,
                created_at=created_at,
                expires_at=created_at + timedelta(seconds=self._ttl),
            )
        )

        return SuggestionResponseEntity(
            category=request.category,
            items=tuple(copy.deepcopy(items)),
            source=SuggestionSource.LIVE,
            fingerprint=fingerprint,
            created_at=created_at,
        )

    async def _fetch(
        self,
        category: Category,
        canonical: dict[str, Any],
        fingerprint: str,
    ) -> list[dict[str, Any]]:
        last_error: Exception | None = None

        for attempt in range(1, self.MAX_ATTEMPTS + 1):
            if attempt > 1:
                self._metrics.record_retry()
            try:
                raw = await self._call_agent(category, canonical)
                return parse_suggestions(category, raw)
            except UpstreamTimeout as e:
                self._metrics.record_failure()
                logger.error("Suggestion agent timed out for %s: %s", fingerprint, e)
                raise
            except UpstreamRejectedRequest as e:
                self._metrics.record_failure()
                logger.error("Suggestion agent rejected %s: %s", fingerprint, e)
                raise SuggestionUnavailable(f"Suggestion agent rejected the request: {e}") from e
            except RETRYABLE_ERRORS as e:
                last_error = e
                if attempt < self.MAX_ATTEMPTS:
                    logger.warning(
                        "Attempt %d for %s failed with %s, retrying: %s",
                        attempt,
                        fingerprint,
                        type(e).__name__,
                        e,
                    )

        self._metrics.record_failure()
        logger.error(
            "Suggestions unavailable for %s after %d attempts: %s",
            fingerprint,
            self.MAX_ATTEMPTS,
            last_error,
        )
        raise SuggestionUnavailable(
            f"No valid suggestions after {self.MAX_ATTEMPTS} attempts: {last_error}"
        ) from last_error

    async def _call_agent(self, category: Category, canonical: dict[str, Any]) -> Any:
        start_time = time.perf_counter()
        try:
            return await asyncio.wait_for(
                self._agent.suggest(category, copy.deepcopy(canonical)),
                timeout=self._agent_timeout,
            )
        except asyncio.TimeoutError as e:
            raise UpstreamTimeout(
                f"No reply from suggestion agent within {self._agent_timeout}s"
            ) from e
        finally:
            self._metrics.record_upstream_call((time.perf_counter() - start_time) * 1000)

    async def _lookup(self, fingerprint: str, now: datetime) -> CacheEntryEntity | None:
        try:
            return await asyncio.wait_for(
                self._repository.lookup(fingerprint, now),
                timeout=self._cache_timeout,
            )
        except Exception as e:
            logger.warning("Cache lookup failed for %s, treating as miss: %s", fingerprint, e)
            return None

    async def _persist(self, entry: CacheEntryEntity) -> None:
        try:
            await asyncio.wait_for(self._repository.insert(entry), timeout=self._cache_timeout)
        except Exception as e:
            logger.warning("Cache write failed for %s: %s", entry.fingerprint, e)

    async def invalidate(self, request: SuggestionRequestEntity) -> tuple[str, bool]:
        """Delete the cached entry for a request.

        Returns:
            Tuple of (fingerprint, whether an entry was deleted)
        """
        _, fingerprint = self.fingerprint(request)
        deleted = await asyncio.wait_for(
            self._repository.delete(fingerprint),
            timeout=self._cache_timeout,
        )
        return fingerprint, deleted

    async def clear(self) -> int:
        """Clear all cache entries.

        Returns:
            Number of entries deleted
        """
        return await asyncio.wait_for(
            self._repository.clear_all(),
            timeout=self._cache_timeout,
        )

    async def get_stats(self) -> dict:
        """Get cache and broker statistics.

        Returns:
            Dictionary with store stats, TTL, and broker counters
        """
        stats = await asyncio.wait_for(
            self._repository.get_stats(),
            timeout=self._cache_timeout,
        )
        stats["ttl_seconds"] = self._ttl
        stats["agent_timeout"] = self._agent_timeout
        stats["metrics"] = self._metrics.to_dict()
        return stats

    async def check_health(self) -> dict[str, bool]:
        """Check the cache store and the agent.

        A check that fails or does not answer in time counts as unhealthy.

        Returns:
            Dict with ``cache`` and ``agent`` health flags
        """
        cache_healthy, agent_healthy = await asyncio.gather(
            self._bounded_check("cache", self._repository.health_check(), self._cache_timeout),
            self._bounded_check("agent", self._agent.is_available(), self._agent_timeout),
        )
        return {"cache": cache_healthy, "agent": agent_healthy}

    async def _bounded_check(self, name: str, check: Awaitable[bool], timeout: float) -> bool:
        try:
            return bool(await asyncio.wait_for(check, timeout=timeout))
        except asyncio.TimeoutError:
            logger.warning("%s health check timed out after %ss", name.capitalize(), timeout)
            return False
        except Exception as e:
            logger.warning("%s health check failed: %s", name.capitalize(), e)
            return False

    def reset_metrics(self) -> None:
        self._metrics.reset()

    async def close(self) -> None:
        """Release the agent client and the store connection."""
        await self._agent.close()
        close = getattr(self._repository, "close", None)
        if close is not None:
            await close()

    @property
    def ttl(self) -> int:
        """Get the cache entry TTL in seconds."""
        return self._ttl

    @property
    def metrics(self) -> BrokerMetrics:
        return self._metrics

    @property
    def repository(self) -> SuggestionCacheStore:
        """Get the underlying repository (for testing)."""
        return self._repository

    @property
    def agent(self) -> SuggestionAgent:
        """Get the underlying agent (for testing)."""
        return self._agent
