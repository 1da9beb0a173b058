"""Deterministic cache keys derived from requests.

Identical logical requests must collide on one key regardless of query
parameter order, while requests that can yield different responses must
not. Only allow-listed headers are folded in; anything else (timestamps,
trace IDs) would fragment the cache for no benefit.
"""

import json
from collections.abc import Iterable, Mapping
from typing import Any

from rag_gateway.config import settings
from rag_gateway.entities import RequestContext

DEFAULT_HEADER_ALLOWLIST = ("accept-language",)


def _canonical_json(value: Any) -> str:
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False, default=str)


def _query_string(query: Mapping[str, Any]) -> str:
    return "&".join(f"{name}={query[name]}" for name in sorted(query))


class CacheKeyGenerator:
    """Builds ``cache:{METHOD}:{PATH}[?a=1&b=2]`` keys.

    Example:
        ```python
        keys = CacheKeyGenerator(include_body=True)
        key = keys.generate(request)
        ```
    """

    def __init__(
        self,
        include_body: bool = False,
        header_allowlist: Iterable[str] = DEFAULT_HEADER_ALLOWLIST,
        prefix: str = "cache",
    ) -> None:
        """Initialize the key generator.

        Args:
            include_body: Fold the canonicalized JSON body into the key.
            header_allowlist: Header names that can change response content.
                Pass an empty iterable to ignore headers entirely.
            prefix: Leading key segment.
        """
        self._include_body = include_body
        self._headers = tuple(sorted({name.lower() for name in header_allowlist}))
        self._prefix = prefix

    def generate(self, request: RequestContext) -> str:
        key = f"{self._prefix}:{request.method.upper()}:{request.path}"
        if request.query:
            key += f"?{_query_string(request.query)}"

        parts = [key]
        if self._include_body and request.body is not None:
            parts.append(_canonical_json(request.body))
        if self._headers:
            headers = {name.lower(): value for name, value in request.headers.items()}
            parts.append(_canonical_json({name: headers.get(name) for name in self._headers}))

        return ":".join(parts)

    __call__ = generate


def generate_cache_key(request: RequestContext) -> str:
    """Default key: method, path and sorted query parameters."""
    return CacheKeyGenerator(header_allowlist=()).generate(request)


def rag_cache_key(request: RequestContext) -> str:
    """Key a RAG query on its ``(query, subject, grade)`` triple.

    The triple is JSON-encoded so values containing the separator cannot
    collide with other combinations.
    """
    body = request.body if isinstance(request.body, dict) else {}
    triple = [body.get("query"), body.get("subject") or "", body.get("grade") or ""]
    return f"{settings.cache_key_prefix}:{_canonical_json(triple)}"
