"""Redis implementation of CacheStore.

Uses plain string keys with server-side expiry, so atomicity across
processes is handled by Redis itself.
"""

import redis.asyncio as redis

from rag_gateway.config import get_redis_client


class RedisCacheStore:
    """Redis-backed cache store.

    This class satisfies the CacheStore protocol through structural
    typing - no explicit inheritance needed.
    """

    def __init__(self, redis_client: redis.Redis | None = None) -> None:
        """Initialize the Redis cache store.

        Args:
            redis_client: Async Redis client with ``decode_responses=True``.
                If None, creates default from settings.
        """
        self._client = redis_client or get_redis_client()

    @classmethod
    def create(cls) -> "RedisCacheStore":
        """Factory method to create RedisCacheStore with defaults from settings."""
        return cls()

    async def get(self, key: str) -> str | None:
        value = await self._client.get(key)
        if isinstance(value, bytes):
            return value.decode()
        return value

    async def set(self, key: str, value: str, ttl: int | None = None) -> bool:
        if ttl:
            result = await self._client.set(key, value, ex=ttl)
        else:
            result = await self._client.set(key, value)
        return bool(result)

    async def delete(self, key: str) -> int:
        return int(await self._client.delete(key))

    async def exists(self, key: str) -> bool:
        return int(await self._client.exists(key)) > 0

    async def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(await self._client.ping())
        except redis.RedisError:
            return False

    async def close(self) -> None:
        """Close the underlying connection pool."""
        await self._client.aclose()

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client
