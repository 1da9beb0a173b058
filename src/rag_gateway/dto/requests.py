"""Request DTOs for API endpoints."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from rag_gateway.entities import MetadataFilter


class QueryRequest(BaseModel):
    """Request DTO for a RAG query.

    Accepts the camelCase names clients send (``responseFormat``,
    ``maxTokens``) as well as the snake_case field names.
    """

    model_config = ConfigDict(populate_by_name=True)

    query: str = Field(..., description="The question to answer", min_length=3)
    subject: str | None = Field(None, description="Restrict retrieval to a subject")
    grade: str | None = Field(None, description="Restrict retrieval to a grade level")
    response_format: Literal["text", "json"] = Field(
        "text",
        alias="responseFormat",
        description="Ask the generator for plain text or a JSON object",
    )
    max_tokens: int | None = Field(
        None,
        alias="maxTokens",
        description="Maximum tokens to generate (defaults to the server setting)",
        gt=0,
    )

    def metadata_filter(self) -> MetadataFilter | None:
        """Build the retrieval filter, or None when no dimension is set."""
        metadata_filter = MetadataFilter(subject=self.subject, grade=self.grade)
        return None if metadata_filter.is_empty else metadata_filter


def format_validation_error(error: ValidationError) -> str:
    """Join every violated constraint into one client-facing message."""
    messages = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ()))
        messages.append(f"{location}: {item['msg']}" if location else item["msg"])
    return ", ".join(messages)
