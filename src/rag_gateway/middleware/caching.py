"""Response caching around any async handler.

On a hit the stored payload is returned with status 200 and the wrapped
handler is never invoked. On a miss the handler runs, and a successful
(2xx) payload is persisted in a detached task so the response is never
delayed by, or failed by, the cache. Any cache error degrades to a plain
pass-through.
"""

import asyncio
import json
import logging
from collections.abc import Callable
from functools import wraps

from rag_gateway.entities import HandlerResponse, RequestContext
from rag_gateway.entities.http import Handler
from rag_gateway.middleware.cache_keys import generate_cache_key
from rag_gateway.protocols import CacheStore

logger = logging.getLogger(__name__)

DEFAULT_TTL = 300  # 5 minutes


def cache_get_requests(request: RequestContext) -> bool:
    return request.method.upper() == "GET"


class CachingMiddleware:
    """Wraps handlers with cache lookup and best-effort persistence.

    Example:
        ```python
        middleware = CachingMiddleware(
            InMemoryCacheStore(),
            ttl=3600,
            should_cache=lambda request: request.method == "POST",
            key_generator=rag_cache_key,
        )
        endpoint = middleware.wrap(handler.handle_query)
        response = await endpoint(request)
        ```
    """

    def __init__(
        self,
        cache_store: CacheStore,
        ttl: int = DEFAULT_TTL,
        should_cache: Callable[[RequestContext], bool] = cache_get_requests,
        key_generator: Callable[[RequestContext], str] = generate_cache_key,
    ) -> None:
        """Initialize the middleware.

        Args:
            cache_store: Backend responses are persisted to.
            ttl: Time-to-live of persisted responses in seconds.
            should_cache: Predicate selecting cacheable requests.
            key_generator: Derives the cache key of a request.
        """
        self._store = cache_store
        self._ttl = ttl
        self._should_cache = should_cache
        self._key_generator = key_generator
        self._pending: set[asyncio.Task] = set()

    def wrap(self, handler: Handler) -> Handler:
        """Return ``handler`` with caching applied."""

        @wraps(handler)
        async def cached_handler(request: RequestContext) -> HandlerResponse:
            if not self._should_cache(request):
                return await handler(request)

            try:
                key = self._key_generator(request)
                cached = await self._store.get(key)
            except Exception:
                logger.exception("Cache lookup failed, serving uncached")
                return await handler(request)

            if cached is not None:
                try:
                    payload = json.loads(cached)
                except ValueError:
                    logger.warning("Discarding undecodable cache entry %s", key)
                else:
                    logger.debug("Cache hit: %s", key)
                    return HandlerResponse(status_code=200, payload=payload)

            logger.debug("Cache miss: %s", key)
            response = await handler(request)
            if response.is_success:
                self._schedule_persist(key, response)
            return response

        return cached_handler

    def _schedule_persist(self, key: str, response: HandlerResponse) -> None:
        task = asyncio.create_task(self._persist(key, response))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _persist(self, key: str, response: HandlerResponse) -> None:
        try:
            await self._store.set(key, json.dumps(response.payload), self._ttl)
        except Exception:
            logger.exception("Failed to cache response for %s", key)

    @property
    def pending_writes(self) -> int:
        return len(self._pending)

    async def flush(self) -> None:
        """Wait for cache writes still in flight (used on shutdown)."""
        if self._pending:
            await asyncio.gather(*self._pending)
