"""Response DTOs for API endpoints."""

from typing import Any

from pydantic import BaseModel, Field


class SourceItem(BaseModel):
    """A retrieved document as shown to clients (content preview only)."""

    id: str = Field(..., description="Document identifier")
    content: str = Field(..., description="Content preview, at most 200 characters plus '...'")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Document metadata")


class QueryResponse(BaseModel):
    """Response DTO for a RAG query."""

    answer: str = Field(..., description="Generated (or fallback) answer")
    sources: list[SourceItem] = Field(
        default_factory=list,
        description="Documents the answer was grounded on, most relevant first",
    )


class ErrorResponse(BaseModel):
    """Response DTO for failed requests."""

    error: str = Field(..., description="Human-readable error message")


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    cache_healthy: bool = Field(..., description="Whether the cache backend is reachable")
    cache_backend: str = Field(..., description="Configured cache backend")
