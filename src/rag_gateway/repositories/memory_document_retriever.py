"""In-process keyword retriever over a fixed document corpus.

Used when no remote retrieval service is configured. Relevance is the
number of distinct query terms a document contains.
"""

import json
import re
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from rag_gateway.config import settings
from rag_gateway.entities import MetadataFilter, RetrievalResult, RetrievedDocument
from rag_gateway.utils import build_context

_TERM_PATTERN = re.compile(r"\w+", flags=re.UNICODE)


def _terms(text: str) -> set[str]:
    return {term.lower() for term in _TERM_PATTERN.findall(text) if len(term) > 2}


def matches_filter(document: RetrievedDocument, criteria: dict[str, Any]) -> bool:
    """Check a document's metadata against filter criteria.

    Scalar criteria must be equal; list criteria need any overlap with a
    list-valued metadata field.
    """
    for key, expected in criteria.items():
        actual = document.metadata.get(key)
        if isinstance(expected, list):
            if not isinstance(actual, list) or not any(value in actual for value in expected):
                return False
        elif actual != expected:
            return False
    return True


class InMemoryDocumentRetriever:
    """Keyword-overlap implementation of the DocumentRetriever protocol."""

    def __init__(
        self,
        documents: Iterable[RetrievedDocument] = (),
        token_model: str | None = None,
    ) -> None:
        self._documents = list(documents)
        self._token_model = token_model or settings.token_model

    @classmethod
    def from_json_file(cls, path: str | Path, token_model: str | None = None) -> "InMemoryDocumentRetriever":
        """Load a corpus from a JSON list of ``{id, content, metadata}`` objects.

        Raises:
            ValueError: If the file is not a list of documents
        """
        items = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(items, list):
            raise ValueError(f"Corpus file {path} must contain a JSON list")

        try:
            documents = [
                RetrievedDocument(
                    id=str(item["id"]),
                    content=item.get("content") or "",
                    metadata=dict(item.get("metadata") or {}),
                )
                for item in items
            ]
        except (KeyError, TypeError, AttributeError) as e:
            raise ValueError(f"Malformed document in corpus file {path}") from e

        return cls(documents, token_model=token_model)

    def __len__(self) -> int:
        return len(self._documents)

    async def retrieve(
        self,
        query: str,
        *,
        metadata_filter: MetadataFilter | None = None,
        top_k: int = 3,
        max_context_tokens: int = 2000,
    ) -> RetrievalResult:
        query_terms = _terms(query)
        criteria = metadata_filter.to_dict() if metadata_filter else {}

        scored: list[tuple[float, RetrievedDocument]] = []
        for document in self._documents:
            if criteria and not matches_filter(document, criteria):
                continue
            overlap = len(query_terms & _terms(document.content))
            if overlap == 0:
                continue
            scored.append((overlap / len(query_terms), document))

        # sorted() is stable, so equally scored documents keep corpus order
        scored = sorted(scored, key=lambda item: -item[0])[:top_k]

        documents = [
            RetrievedDocument(
                id=document.id,
                content=document.content,
                metadata={**document.metadata, "score": score},
            )
            for score, document in scored
        ]

        return RetrievalResult(
            documents=documents,
            context=build_context(documents, max_context_tokens, self._token_model),
        )
