from dataclasses import dataclass


@dataclass
class BrokerMetrics:
    """Track counters for suggestion broker calls."""

    total_requests: int = 0
    cache_hits: int = 0
    cache_misses: int = 0
    upstream_calls: int = 0
    upstream_retries: int = 0
    failures: int = 0
    total_upstream_time_ms: float = 0.0

    @property
    def hit_rate(self) -> float:
        """Calculate cache hit rate."""
        if self.total_requests == 0:
            return 0.0
        return self.cache_hits / self.total_requests

    @property
    def avg_upstream_time_ms(self) -> float:
        """Calculate average upstream call duration."""
        if self.upstream_calls == 0:
            return 0.0
        return self.total_upstream_time_ms / self.upstream_calls

    def record_hit(self) -> None:
        """Record a cache hit."""
        self.total_requests += 1
        self.cache_hits += 1

    def record_miss(self) -> None:
        """Record a cache miss."""
        self.total_requests += 1
        self.cache_misses += 1

    def record_upstream_call(self, duration_ms: float) -> None:
        """Record one attempt against the suggestion agent."""
        self.upstream_calls += 1
        self.total_upstream_time_ms += duration_ms

    def record_retry(self) -> None:
        self.upstream_retries += 1

    def record_failure(self) -> None:
        self.failures += 1

    def reset(self) -> None:
        """Zero every counter."""
        self.total_requests = 0
        self.cache_hits = 0
        self.cache_misses = 0
        self.upstream_calls = 0
        self.upstream_retries = 0
        self.failures = 0
        self.total_upstream_time_ms = 0.0

    def to_dict(self) -> dict[str, float | int]:
        """Convert metrics to dictionary."""
        return {
            "total_requests": self.total_requests,
            "cache_hits": self.cache_hits,
            "cache_misses": self.cache_misses,
            "hit_rate": self.hit_rate,
            "upstream_calls": self.upstream_calls,
            "upstream_retries": self.upstream_retries,
            "failures": self.failures,
            "avg_upstream_time_ms": self.avg_upstream_time_ms,
        }
