import logging
import os
from dataclasses import dataclass
from functools import lru_cache

import redis.asyncio as redis
from dotenv import load_dotenv

load_dotenv()

CACHE_BACKENDS = ("redis", "memory")


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Redis
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")

    # Cache
    cache_backend: str = os.getenv("CACHE_BACKEND", "redis")
    cache_key_prefix: str = os.getenv("CACHE_KEY_PREFIX", "suggestions")
    suggestion_cache_ttl: int = int(os.getenv("SUGGESTION_CACHE_TTL", "86400"))  # 1 day default
    cache_timeout: float = float(os.getenv("CACHE_TIMEOUT", "2.0"))

    # Suggestion agent
    agent_base_url: str = os.getenv("AGENT_BASE_URL", "http://localhost:8001")
    agent_api_key: str | None = os.getenv("AGENT_API_KEY")
    agent_timeout: float = float(os.getenv("AGENT_TIMEOUT", "8.0"))

    # Canonicalization
    budget_precision: int = int(os.getenv("BUDGET_PRECISION", "2"))

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "true").lower() == "true"

    @property
    def uses_redis(self) -> bool:
        """Check if the Redis cache backend is configured.

        Returns:
            True if entries are stored in Redis, False for the in-memory store
        """
        return self.cache_backend == "redis"

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.cache_backend not in CACHE_BACKENDS:
            raise ValueError(
                f"CACHE_BACKEND must be one of {list(CACHE_BACKENDS)}, got {self.cache_backend!r}"
            )

        if self.suggestion_cache_ttl <= 0:
            raise ValueError("SUGGESTION_CACHE_TTL must be a positive number of seconds")

        if self.cache_timeout <= 0 or self.agent_timeout <= 0:
            raise ValueError("CACHE_TIMEOUT and AGENT_TIMEOUT must be positive")

        if not 0 <= self.budget_precision <= 6:
            raise ValueError(f"BUDGET_PRECISION must be between 0 and 6, got {self.budget_precision}")

        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"LOG_LEVEL {self.log_level!r} is not a known logging level")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def get_redis_client() -> redis.Redis:
    """Create an async Redis client instance."""
    return redis.from_url(
        settings.redis_url,
        password=settings.redis_password,
        decode_responses=True,
        socket_timeout=settings.cache_timeout,
        socket_connect_timeout=settings.cache_timeout,
    )
