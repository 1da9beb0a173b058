"""Approximate token counting and budget-aware prompt packing.

Token counts are estimated from a per-model characters-per-token ratio.
This is deliberately rough: callers tolerate a small overshoot, but never
broken sentences, so truncation prefers sentence boundaries over exact
token precision.
"""

import math
from collections.abc import Iterable, Sequence

from rag_gateway.entities import Message, ModelProfile, TextSection

DEFAULT_MODEL = "default"

MODEL_PROFILES: dict[str, ModelProfile] = {
    "gpt-3.5-turbo": ModelProfile("gpt-3.5-turbo", 4.0),
    "gpt-4": ModelProfile("gpt-4", 3.75),
    "gpt-4-turbo-preview": ModelProfile("gpt-4-turbo-preview", 3.75),
    DEFAULT_MODEL: ModelProfile(DEFAULT_MODEL, 4.0),
}

# Every reply is primed with <|start|>assistant<|message|>
REPLY_PRIMING_TOKENS = 3
# role + content delimiters around each message
MESSAGE_FRAMING_TOKENS = 4

SENTENCE_ENDINGS = (".", "!", "?")
# A sentence boundary is only used if it keeps this share of the cutoff
BOUNDARY_MIN_RATIO = 0.8


def get_model_profile(model: str | None = None) -> ModelProfile:
    """Look up a model profile, falling back to the default ratio."""
    return MODEL_PROFILES.get(model or DEFAULT_MODEL, MODEL_PROFILES[DEFAULT_MODEL])


def estimate_tokens(text: str, model: str | None = None) -> int:
    """Estimate the token count of ``text`` for ``model``.

    Args:
        text: The text to measure
        model: Model name; unknown models use the default ratio

    Returns:
        ``ceil(len(text) / chars_per_token)``, 0 for empty text
    """
    if not text:
        return 0
    return math.ceil(len(text) / get_model_profile(model).chars_per_token)


def estimate_conversation_tokens(messages: Iterable[Message], model: str | None = None) -> int:
    """Estimate the prompt cost of a chat conversation.

    Args:
        messages: Ordered chat messages
        model: Model name used for content estimation

    Returns:
        Reply priming overhead plus framing and content per message
    """
    total = REPLY_PRIMING_TOKENS
    for message in messages:
        total += MESSAGE_FRAMING_TOKENS + estimate_tokens(message.content, model)
    return total


def truncate_to_token_limit(text: str, max_tokens: int, model: str | None = None) -> str:
    """Shrink ``text`` to fit ``max_tokens``, preferring a sentence boundary.

    The character cutoff is scaled from the token overshoot. If a sentence
    ending lies within the last 20% before the cutoff, the text is cut just
    after it; otherwise the raw cutoff is kept.

    Args:
        text: The text to shrink
        max_tokens: Token budget
        model: Model name used for estimation

    Returns:
        ``text`` unchanged when it already fits, otherwise a prefix of it
    """
    estimated = estimate_tokens(text, model)
    if estimated <= max_tokens:
        return text
    if max_tokens <= 0:
        return ""

    cutoff = math.floor(len(text) * (max_tokens / estimated))
    truncated = text[:cutoff]

    last_boundary = max(truncated.rfind(ending) for ending in SENTENCE_ENDINGS)
    if last_boundary >= 0 and last_boundary >= cutoff * BOUNDARY_MIN_RATIO:
        return truncated[: last_boundary + 1]

    return truncated


def optimize_prompt(
    sections: Sequence[TextSection],
    max_tokens: int,
    model: str | None = None,
) -> str:
    """Pack prompt sections into a token budget by priority.

    Sections are taken highest priority first (ties keep their original
    order) and concatenated whole while they fit. The first section that
    does not fit is truncated into the remaining budget and everything
    after it is dropped. No separators are inserted.

    Args:
        sections: Candidate sections
        max_tokens: Token budget for the whole prompt
        model: Model name used for estimation

    Returns:
        The packed prompt, empty when the budget is not positive
    """
    if max_tokens <= 0:
        return ""

    parts: list[str] = []
    tokens_used = 0

    for section in sorted(sections, key=lambda s: -s.priority):
        section_tokens = estimate_tokens(section.text, model)

        if tokens_used + section_tokens <= max_tokens:
            parts.append(section.text)
            tokens_used += section_tokens
            continue

        remaining = max_tokens - tokens_used
        if remaining > 0:
            parts.append(truncate_to_token_limit(section.text, remaining, model))
        break

    return "".join(parts)
