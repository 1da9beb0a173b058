"""Retrieval domain entities."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class RetrievedDocument:
    """A document returned by a retriever.

    Owned by the retriever; the service only reads it and builds
    truncated display copies for responses.
    """

    id: str
    content: str
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class RetrievalResult:
    """Ordered documents plus the merged context string built from them."""

    documents: list[RetrievedDocument] = field(default_factory=list)
    context: str = ""

    @classmethod
    def empty(cls) -> "RetrievalResult":
        return cls()
