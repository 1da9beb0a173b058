import logging
import os
from dataclasses import dataclass
from functools import lru_cache

import redis.asyncio as redis
from dotenv import load_dotenv

load_dotenv()

CACHE_BACKENDS = ("memory", "redis")


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Environment
    environment: str = os.getenv("APP_ENV", "development")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Redis
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")

    # Cache
    cache_backend: str = os.getenv("CACHE_BACKEND", "memory")
    cache_ttl: int = int(os.getenv("CACHE_TTL", "3600"))  # 1 hour default
    cache_key_prefix: str = os.getenv("CACHE_KEY_PREFIX", "rag")

    # Retriever
    retriever_url: str | None = os.getenv("RETRIEVER_URL")
    retriever_top_k: int = int(os.getenv("RETRIEVER_TOP_K", "3"))
    retriever_max_context_tokens: int = int(os.getenv("RETRIEVER_MAX_CONTEXT_TOKENS", "2000"))
    retriever_timeout: float = float(os.getenv("RETRIEVER_TIMEOUT", "30"))
    # JSON list of documents for the local retriever
    retriever_corpus_path: str | None = os.getenv("RETRIEVER_CORPUS_PATH")

    # Generator (any OpenAI-compatible chat completions endpoint)
    generator_base_url: str = os.getenv("GENERATOR_BASE_URL", "https://openrouter.ai/api/v1")
    generator_api_key: str | None = os.getenv("GENERATOR_API_KEY")
    generator_model: str = os.getenv("GENERATOR_MODEL", "openai/gpt-4-turbo")
    generator_temperature: float = float(os.getenv("GENERATOR_TEMPERATURE", "0.7"))
    generator_default_max_tokens: int = int(os.getenv("GENERATOR_DEFAULT_MAX_TOKENS", "1000"))
    generator_timeout: float = float(os.getenv("GENERATOR_TIMEOUT", "30"))

    # Prompt budgeting
    token_model: str = os.getenv("TOKEN_MODEL", "default")
    prompt_token_budget: int = int(os.getenv("PROMPT_TOKEN_BUDGET", "3000"))

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "true").lower() == "true"

    @property
    def is_production(self) -> bool:
        """Check if error details must be hidden from clients.

        Returns:
            True when running with APP_ENV=production
        """
        return self.environment.lower() == "production"

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.cache_backend not in CACHE_BACKENDS:
            raise ValueError(
                f"CACHE_BACKEND must be one of {list(CACHE_BACKENDS)}, got {self.cache_backend}"
            )

        if self.cache_ttl <= 0:
            raise ValueError("CACHE_TTL must be a positive number of seconds")

        if not 0 <= self.generator_temperature <= 2:
            raise ValueError("GENERATOR_TEMPERATURE must be between 0 and 2")

        for name in (
            "retriever_top_k",
            "retriever_max_context_tokens",
            "retriever_timeout",
            "generator_default_max_tokens",
            "prompt_token_budget",
        ):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name.upper()} must be positive")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def configure_logging() -> None:
    """Apply LOG_LEVEL to the root logger."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def get_redis_client() -> redis.Redis:
    """Create an async Redis client instance."""
    return redis.from_url(
        settings.redis_url,
        password=settings.redis_password,
        decode_responses=True,
    )
