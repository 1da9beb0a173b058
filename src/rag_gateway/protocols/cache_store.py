"""Cache storage protocol.

Defines the interface for any key/value backend the caching middleware
can persist serialized responses to.

Implementations can include:
- In-process dictionary (default, single process)
- Redis (multi-process; atomicity delegated to the server)
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class CacheStore(Protocol):
    """Protocol for TTL-based key/value cache backends.

    Each operation must be atomic on its own. Expired entries behave as
    missing and are evicted lazily when read.

    Example:
        ```python
        from rag_gateway.protocols import CacheStore

        store: CacheStore = InMemoryCacheStore()
        store: CacheStore = RedisCacheStore.create()
        ```
    """

    async def get(self, key: str) -> str | None:
        """Get a value.

        Args:
            key: The cache key

        Returns:
            The stored value, or None if missing or expired
        """
        ...

    async def set(self, key: str, value: str, ttl: int | None = None) -> bool:
        """Store a value, replacing any previous one.

        Args:
            key: The cache key
            value: The serialized value
            ttl: Time-to-live in seconds; None keeps it until deleted

        Returns:
            True once stored
        """
        ...

    async def delete(self, key: str) -> int:
        """Delete a value.

        Args:
            key: The cache key

        Returns:
            Number of entries deleted (0 or 1)
        """
        ...

    async def exists(self, key: str) -> bool:
        """Check if a live value is stored under ``key``."""
        ...

    async def health_check(self) -> bool:
        """Check if the backend is accessible.

        Returns:
            True if healthy, False otherwise
        """
        ...
