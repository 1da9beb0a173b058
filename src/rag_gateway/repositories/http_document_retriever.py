"""HTTP client for a remote document retrieval service.

The service is expected to expose ``POST /retrieve`` taking
``{query, filter, top_k, max_context_tokens}`` and returning
``{documents: [{id, content, metadata}], context}``. When ``context`` is
missing the merged context is assembled locally from the documents.
"""

import httpx

from rag_gateway.config import settings
from rag_gateway.entities import MetadataFilter, RetrievalResult, RetrievedDocument
from rag_gateway.utils import build_context


class HttpDocumentRetriever:
    """HTTP implementation of the DocumentRetriever protocol.

    Example:
        ```python
        retriever = HttpDocumentRetriever.create(base_url="http://localhost:9000")
        result = await retriever.retrieve("photosynthesis", top_k=3)
        ```
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        token_model: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the retriever client.

        Args:
            base_url: Retrieval service base URL. Defaults to settings.retriever_url.
            timeout: Request timeout in seconds. Defaults to settings.retriever_timeout.
            token_model: Model name used when context must be assembled locally.
            http_client: Preconfigured client. If None, one is created lazily.
        """
        resolved = base_url or settings.retriever_url
        if not resolved:
            raise ValueError("A retriever base URL is required (set RETRIEVER_URL)")
        self._base_url = resolved.rstrip("/")
        self._timeout = timeout or settings.retriever_timeout
        self._token_model = token_model or settings.token_model
        self._client: httpx.AsyncClient | None = http_client

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
            )
        return self._client

    @classmethod
    def create(cls, base_url: str | None = None) -> "HttpDocumentRetriever":
        """Factory method to create HttpDocumentRetriever with defaults."""
        return cls(base_url=base_url)

    async def retrieve(
        self,
        query: str,
        *,
        metadata_filter: MetadataFilter | None = None,
        top_k: int = 3,
        max_context_tokens: int = 2000,
    ) -> RetrievalResult:
        """Retrieve documents from the remote service.

        Raises:
            RuntimeError: If the request fails or the payload is malformed
        """
        payload = {
            "query": query,
            "filter": metadata_filter.to_dict() if metadata_filter else {},
            "top_k": top_k,
            "max_context_tokens": max_context_tokens,
        }

        try:
            response = await self.client.post(f"{self._base_url}/retrieve", json=payload)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise RuntimeError(f"Retriever API error: {e}") from e

        try:
            documents = [
                RetrievedDocument(
                    id=str(item["id"]),
                    content=item.get("content") or "",
                    metadata=dict(item.get("metadata") or {}),
                )
                for item in data.get("documents", [])
            ][:top_k]
        except (KeyError, TypeError, AttributeError) as e:
            raise RuntimeError(f"Unexpected retriever response format: {data}") from e

        context = data.get("context")
        if context is None:
            context = build_context(documents, max_context_tokens, self._token_model)

        return RetrievalResult(documents=documents, context=context)

    async def close(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None
