"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from rag_gateway.config import configure_logging, settings
from rag_gateway.entities.http import Handler
from rag_gateway.handlers import RagHandler
from rag_gateway.middleware import CachingMiddleware, rag_cache_key
from rag_gateway.protocols import AnswerGenerator, CacheStore, DocumentRetriever
from rag_gateway.repositories import (
    HttpDocumentRetriever,
    InMemoryCacheStore,
    InMemoryDocumentRetriever,
    OpenRouterAnswerGenerator,
    RedisCacheStore,
)
from rag_gateway.services import RagService

logger = logging.getLogger(__name__)


def get_query_endpoint(request: Request) -> Handler:
    """Dependency injection for the cached RAG query endpoint from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The cache-wrapped query handler

    Raises:
        RuntimeError: If the endpoint is not initialized
    """
    endpoint = getattr(request.app.state, "query_endpoint", None)
    if endpoint is None:
        raise RuntimeError("Query endpoint not initialized. Check lifespan setup.")
    return endpoint


def get_cache_store(request: Request) -> CacheStore:
    """Dependency injection for the CacheStore from app.state."""
    store = getattr(request.app.state, "cache_store", None)
    if store is None:
        raise RuntimeError("CacheStore not initialized. Check lifespan setup.")
    return store


def build_cache_store() -> CacheStore:
    """Create the cache backend selected by CACHE_BACKEND."""
    if settings.cache_backend == "redis":
        return RedisCacheStore.create()
    return InMemoryCacheStore()


def build_retriever() -> DocumentRetriever:
    """Use the remote retriever when RETRIEVER_URL is set, else a local index.

    The local index is loaded from RETRIEVER_CORPUS_PATH when given.
    """
    if settings.retriever_url:
        return HttpDocumentRetriever.create()
    if settings.retriever_corpus_path:
        retriever = InMemoryDocumentRetriever.from_json_file(settings.retriever_corpus_path)
        logger.info("Loaded %d documents from %s", len(retriever), settings.retriever_corpus_path)
        return retriever
    logger.warning("RETRIEVER_URL and RETRIEVER_CORPUS_PATH not set, using an empty in-memory retriever")
    return InMemoryDocumentRetriever()


def create_lifespan(
    cache_store: CacheStore | None = None,
    retriever: DocumentRetriever | None = None,
    generator: AnswerGenerator | None = None,
):
    """Build the lifespan context manager for the FastAPI app.

    Collaborators that are passed in are used as-is; missing ones are
    created from settings and closed again on shutdown.

    Args:
        cache_store: Cache backend override
        retriever: Document retriever override
        generator: Answer generator override
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Initialize all layers and store them in app.state:
        1. Repositories (cache store, retriever, generator)
        2. Service (business logic)
        3. Handler wrapped by the caching middleware - app.state.query_endpoint
        """
        configure_logging()
        owned = []

        store = cache_store
        if store is None:
            store = build_cache_store()
            owned.append(store)

        doc_retriever = retriever
        if doc_retriever is None:
            doc_retriever = build_retriever()
            owned.append(doc_retriever)

        answer_generator = generator
        if answer_generator is None:
            answer_generator = OpenRouterAnswerGenerator.create()
            owned.append(answer_generator)

        rag_service = RagService.create(retriever=doc_retriever, generator=answer_generator)
        rag_handler = RagHandler(rag_service=rag_service)
        caching = CachingMiddleware(
            store,
            ttl=settings.cache_ttl,
            should_cache=lambda request: request.method.upper() == "POST",
            key_generator=rag_cache_key,
        )

        app.state.cache_store = store
        app.state.rag_service = rag_service
        app.state.caching_middleware = caching
        app.state.query_endpoint = caching.wrap(rag_handler.handle_query)

        logger.info(
            "RAG gateway initialized (cache backend: %s, ttl: %ss)",
            settings.cache_backend,
            settings.cache_ttl,
        )

        yield

        # Cleanup - let cache writes land, then release owned clients
        await caching.flush()
        for resource in owned:
            close = getattr(resource, "close", None)
            if close is not None:
                await close()

        del app.state.query_endpoint
        del app.state.caching_middleware
        del app.state.rag_service
        del app.state.cache_store
        logger.info("RAG gateway shut down")

    return lifespan


# Type aliases for cleaner dependency injection
QueryEndpointDep = Annotated[Handler, Depends(get_query_endpoint)]
CacheStoreDep = Annotated[CacheStore, Depends(get_cache_store)]
