"""
Tests for settings validation and logging setup.
"""

import logging

import pytest

from trip_suggestions.config import Settings
from trip_suggestions.logging_config import configure_logging


@pytest.mark.parametrize(
    "overrides",
    [
        {"cache_backend": "disk"},
        {"suggestion_cache_ttl": 0},
        {"agent_timeout": 0},
        {"cache_timeout": -1.0},
        {"budget_precision": 7},
        {"log_level": "CHATTY"},
    ],
)
def test_invalid_settings_are_rejected(overrides):
    """Test __post_init__ validation."""
    with pytest.raises(ValueError):
        Settings(**overrides)


def test_memory_backend():
    """Test backend selection flag."""
    assert Settings(cache_backend="memory").uses_redis is False
    assert Settings(cache_backend="redis").uses_redis is True


def test_configure_logging_adds_one_handler():
    """Test repeated configuration does not duplicate handlers."""
    logger = configure_logging("DEBUG")
    configure_logging("WARNING")

    assert logger.name == "trip_suggestions"
    assert len(logger.handlers) == 1
    assert logger.level == logging.WARNING
