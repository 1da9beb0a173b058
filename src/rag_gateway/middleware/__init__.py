"""Response caching middleware and cache key generation."""

from .cache_keys import DEFAULT_HEADER_ALLOWLIST, CacheKeyGenerator, generate_cache_key, rag_cache_key
from .caching import CachingMiddleware, cache_get_requests

__all__ = [
    "DEFAULT_HEADER_ALLOWLIST",
    "CacheKeyGenerator",
    "CachingMiddleware",
    "cache_get_requests",
    "generate_cache_key",
    "rag_cache_key",
]
