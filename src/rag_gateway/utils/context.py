"""Merge retrieved documents into a single prompt context."""

from collections.abc import Sequence

from rag_gateway.entities import RetrievedDocument
from rag_gateway.utils.tokens import truncate_to_token_limit

DOCUMENT_SEPARATOR = "\n\n---\n\n"


def format_document_header(document: RetrievedDocument) -> str:
    """Build the ``[Subject: ... | Grade: ...]`` header for a document.

    Returns an empty string unless subject, grade or type is present.
    """
    metadata = document.metadata
    subject = metadata.get("subject")
    grade = metadata.get("grade")
    doc_type = metadata.get("type")
    tags = metadata.get("tags")

    if not (subject or grade or doc_type):
        return ""

    parts = []
    if subject:
        parts.append(f"Subject: {subject}")
    if grade:
        parts.append(f"Grade: {grade}")
    if doc_type:
        parts.append(f"Type: {doc_type}")
    if tags:
        tag_text = ", ".join(str(tag) for tag in tags) if isinstance(tags, list) else str(tags)
        parts.append(f"Tags: {tag_text}")

    return f"[{' | '.join(parts)}]\n\n"


def build_context(
    documents: Sequence[RetrievedDocument],
    max_context_tokens: int,
    model: str | None = None,
) -> str:
    """Join documents with their headers and cap the result to a token budget."""
    combined = DOCUMENT_SEPARATOR.join(
        f"{format_document_header(document)}{document.content}" for document in documents
    )
    return truncate_to_token_limit(combined, max_context_tokens, model)
