"""Document retriever protocol."""

from typing import Protocol, runtime_checkable

from rag_gateway.entities import MetadataFilter, RetrievalResult


@runtime_checkable
class DocumentRetriever(Protocol):
    """Protocol for services that find documents relevant to a query.

    Implementations can include:
    - A remote retrieval service over HTTP
    - An in-process keyword index (default, for local runs)
    """

    async def retrieve(
        self,
        query: str,
        *,
        metadata_filter: MetadataFilter | None = None,
        top_k: int = 3,
        max_context_tokens: int = 2000,
    ) -> RetrievalResult:
        """Retrieve documents and a merged context for ``query``.

        Args:
            query: The user query
            metadata_filter: Optional metadata restriction
            top_k: Maximum number of documents
            max_context_tokens: Token budget for the merged context

        Returns:
            Documents ordered by relevance, plus the context string
        """
        ...
