"""Cache entry domain entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CacheEntryEntity:
    """Domain entity for a stored cache value.

    Owned exclusively by a cache store; callers only ever see ``value``.

    Attributes:
        key: The cache key
        value: The serialized payload
        expires_at: Unix timestamp after which the entry is stale, or None
    """

    key: str
    value: str
    expires_at: float | None = None

    def is_expired(self, now: float) -> bool:
        """Check whether the entry is stale at ``now``."""
        return self.expires_at is not None and self.expires_at <= now
