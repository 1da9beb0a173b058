"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by services,
middleware and repositories. They are NOT used for API contracts - use
DTOs from the dto package for that.
"""

from .cache_entry import CacheEntryEntity
from .http import HandlerResponse, RequestContext
from .message import Message
from .metadata_filter import MetadataFilter
from .model_profile import ModelProfile
from .retrieval import RetrievalResult, RetrievedDocument
from .text_section import TextSection

__all__ = [
    "CacheEntryEntity",
    "HandlerResponse",
    "Message",
    "MetadataFilter",
    "ModelProfile",
    "RequestContext",
    "RetrievalResult",
    "RetrievedDocument",
    "TextSection",
]
