"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
They are used for request/response validation and serialization.

Internal domain logic should use entities from the entities package.
"""

from .requests import QueryRequest, format_validation_error
from .responses import ErrorResponse, HealthCheckResponse, QueryResponse, SourceItem

__all__ = [
    "QueryRequest",
    "format_validation_error",
    "QueryResponse",
    "SourceItem",
    "ErrorResponse",
    "HealthCheckResponse",
]
