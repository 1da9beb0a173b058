import json
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from rag_gateway.api.dependencies import CacheStoreDep, QueryEndpointDep, create_lifespan
from rag_gateway.config import settings
from rag_gateway.dto import HealthCheckResponse
from rag_gateway.entities import RequestContext
from rag_gateway.protocols import AnswerGenerator, CacheStore, DocumentRetriever

QUERY_PATH = "/api/rag/query"


async def to_request_context(request: Request) -> RequestContext:
    """Reduce a Starlette request to a framework-neutral RequestContext.

    A missing or non-JSON body becomes None and is rejected by validation.
    """
    body: Any = None
    raw = await request.body()
    if raw:
        try:
            body = json.loads(raw)
        except ValueError:
            body = None

    return RequestContext(
        method=request.method,
        path=request.url.path,
        query=dict(request.query_params),
        body=body,
        headers={name.lower(): value for name, value in request.headers.items()},
    )


def create_app(
    cache_store: CacheStore | None = None,
    retriever: DocumentRetriever | None = None,
    generator: AnswerGenerator | None = None,
) -> FastAPI:
    """Create the FastAPI application.

    Args:
        cache_store: Cache backend override (defaults from settings)
        retriever: Document retriever override (defaults from settings)
        generator: Answer generator override (defaults from settings)

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="RAG Gateway API",
        description="Token-budgeted retrieval-augmented answers with response caching",
        version="0.1.0",
        lifespan=create_lifespan(cache_store=cache_store, retriever=retriever, generator=generator),
    )

    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/")
    async def root() -> dict[str, Any]:
        """Root endpoint with API information."""
        return {
            "name": "RAG Gateway API",
            "version": "0.1.0",
            "description": "Token-budgeted retrieval-augmented answers with response caching",
            "endpoints": {
                "query": QUERY_PATH,
                "health": "/health",
                "docs": "/docs",
            },
        }

    @app.get("/health", response_model=HealthCheckResponse)
    async def health(cache_store: CacheStoreDep) -> JSONResponse:
        """Health check endpoint."""
        is_healthy = await cache_store.health_check()
        payload = HealthCheckResponse(
            status="healthy" if is_healthy else "unhealthy",
            cache_healthy=is_healthy,
            cache_backend=settings.cache_backend,
        )
        return JSONResponse(
            status_code=status.HTTP_200_OK if is_healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
            content=payload.model_dump(),
        )

    # Every method is routed to the handler so it can answer 405 itself.
    @app.api_route(QUERY_PATH, methods=["GET", "POST", "PUT", "PATCH", "DELETE"])
    async def rag_query(request: Request, endpoint: QueryEndpointDep) -> JSONResponse:
        """Answer a query with retrieved context; responses are cached per (query, subject, grade)."""
        context = await to_request_context(request)
        response = await endpoint(context)
        return JSONResponse(status_code=response.status_code, content=response.payload)

    return app


app = create_app()
