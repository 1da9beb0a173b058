"""Repository layer for data access.

This layer abstracts external dependencies (Redis, retrieval services,
generation APIs) behind protocol-based interfaces. This enables:
- Easy swapping of implementations (in-memory → Redis, local → HTTP, etc.)
- Unit testing with fake implementations
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from rag_gateway.protocols import AnswerGenerator, CacheStore, DocumentRetriever

from .http_document_retriever import HttpDocumentRetriever
from .memory_cache_store import InMemoryCacheStore
from .memory_document_retriever import InMemoryDocumentRetriever
from .openrouter_answer_generator import OpenRouterAnswerGenerator
from .redis_cache_store import RedisCacheStore

__all__ = [
    "AnswerGenerator",
    "CacheStore",
    "DocumentRetriever",
    "HttpDocumentRetriever",
    "InMemoryCacheStore",
    "InMemoryDocumentRetriever",
    "OpenRouterAnswerGenerator",
    "RedisCacheStore",
]
