"""RAG Gateway - token-budgeted retrieval-augmented answers with response caching.

This package provides a layered architecture for a RAG query service:

Layers:
    - protocols: Interface contracts (CacheStore, DocumentRetriever, AnswerGenerator)
    - repositories: Data access implementations
    - services: Business logic (RAG orchestration)
    - middleware: Cache key generation and response caching
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)
    - utils: Token estimation, truncation and prompt packing

Usage:
    ```python
    from rag_gateway.services import RagService

    service = RagService.create(retriever=retriever, generator=generator)
    ```

For HTTP API:
    ```python
    from rag_gateway.api.app import app
    ```
"""

from rag_gateway.config import settings
from rag_gateway.dto import QueryRequest, QueryResponse
from rag_gateway.entities import Message, RetrievedDocument, TextSection
from rag_gateway.handlers import RagHandler
from rag_gateway.middleware import CacheKeyGenerator, CachingMiddleware
from rag_gateway.protocols import AnswerGenerator, CacheStore, DocumentRetriever
from rag_gateway.repositories import InMemoryCacheStore, RedisCacheStore
from rag_gateway.services import RagService

__all__ = [
    # Configuration
    "settings",
    # Protocols (interfaces)
    "AnswerGenerator",
    "CacheStore",
    "DocumentRetriever",
    # Services (business logic)
    "RagService",
    # Middleware
    "CacheKeyGenerator",
    "CachingMiddleware",
    # Handlers (HTTP)
    "RagHandler",
    # Repositories (data access)
    "InMemoryCacheStore",
    "RedisCacheStore",
    # Entities (domain models)
    "Message",
    "RetrievedDocument",
    "TextSection",
    # DTOs (API contracts)
    "QueryRequest",
    "QueryResponse",
]
