"""Utility modules for token budgeting and context assembly."""

from .context import build_context, format_document_header
from .tokens import (
    DEFAULT_MODEL,
    MODEL_PROFILES,
    estimate_conversation_tokens,
    estimate_tokens,
    get_model_profile,
    optimize_prompt,
    truncate_to_token_limit,
)

__all__ = [
    "DEFAULT_MODEL",
    "MODEL_PROFILES",
    "build_context",
    "estimate_conversation_tokens",
    "estimate_tokens",
    "format_document_header",
    "get_model_profile",
    "optimize_prompt",
    "truncate_to_token_limit",
]
