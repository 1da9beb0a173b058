"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (in-memory → Redis, local → HTTP, etc.)
- Unit testing with fake implementations
- Clear separation of concerns

Usage:
    ```python
    from rag_gateway.protocols import CacheStore

    # Type hints work with any implementation
    store: CacheStore = InMemoryCacheStore()  # works
    store: CacheStore = RedisCacheStore()     # also works
    ```
"""

from .answer_generator import AnswerGenerator
from .cache_store import CacheStore
from .document_retriever import DocumentRetriever

__all__ = [
    "AnswerGenerator",
    "CacheStore",
    "DocumentRetriever",
]
