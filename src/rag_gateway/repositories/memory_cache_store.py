"""In-memory implementation of CacheStore.

Suitable for a single process: each operation runs without suspending, so
the event loop makes it atomic without locks. Expiry is checked lazily on
read; there is no background sweeper.
"""

import time
from collections.abc import Callable

from rag_gateway.entities import CacheEntryEntity


class InMemoryCacheStore:
    """Dictionary-backed cache store with lazy TTL eviction.

    This class satisfies the CacheStore protocol through structural
    typing - no explicit inheritance needed.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        """Initialize the store.

        Args:
            clock: Returns the current Unix time; injectable for tests.
        """
        self._entries: dict[str, CacheEntryEntity] = {}
        self._clock = clock

    def _live_entry(self, key: str) -> CacheEntryEntity | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.is_expired(self._clock()):
            del self._entries[key]
            return None
        return entry

    async def get(self, key: str) -> str | None:
        entry = self._live_entry(key)
        return entry.value if entry else None

    async def set(self, key: str, value: str, ttl: int | None = None) -> bool:
        expires_at = self._clock() + ttl if ttl else None
        self._entries[key] = CacheEntryEntity(key=key, value=value, expires_at=expires_at)
        return True

    async def delete(self, key: str) -> int:
        if self._live_entry(key) is None:
            return 0
        del self._entries[key]
        return 1

    async def exists(self, key: str) -> bool:
        return self._live_entry(key) is not None

    async def health_check(self) -> bool:
        return True

    def __len__(self) -> int:
        """Number of stored entries, including not yet evicted stale ones."""
        return len(self._entries)
