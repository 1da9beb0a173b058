"""Framework-neutral request/response entities.

The caching middleware and handlers work on these instead of a web
framework's objects, so they can wrap any async handler.
"""

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class RequestContext:
    """An incoming request reduced to the fields handlers care about.

    Attributes:
        method: Upper-case HTTP method
        path: Request path without the query string
        query: Query parameters
        body: Decoded JSON body (None when absent or not JSON)
        headers: Header mapping with lower-case names
    """

    method: str
    path: str
    query: Mapping[str, str] = field(default_factory=dict)
    body: Any = None
    headers: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class HandlerResponse:
    """Status code plus JSON-serializable payload produced by a handler."""

    status_code: int
    payload: Any

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


Handler = Callable[[RequestContext], Awaitable[HandlerResponse]]
