"""
Tests for settings validation.
"""

import pytest

from rag_gateway.config import Settings


def test_defaults_are_valid():
    """Default settings pass validation."""
    config = Settings()
    assert config.cache_backend in ("memory", "redis")
    assert config.retriever_top_k > 0


@pytest.mark.parametrize(
    "overrides",
    [
        {"cache_backend": "memcached"},
        {"cache_ttl": 0},
        {"generator_temperature": 3.0},
        {"prompt_token_budget": -1},
        {"retriever_top_k": 0},
        {"retriever_timeout": 0},
    ],
)
def test_invalid_settings_are_rejected(overrides):
    """Out-of-range values raise ValueError."""
    with pytest.raises(ValueError):
        Settings(**overrides)


def test_production_flag():
    """Only APP_ENV=production hides error details."""
    assert Settings(environment="production").is_production is True
    assert Settings(environment="development").is_production is False
