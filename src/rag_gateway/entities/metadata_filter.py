"""Retrieval metadata filter."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class MetadataFilter:
    """Optional metadata dimensions a retrieval is restricted to.

    A dimension only takes part in filtering when it is set.
    """

    subject: str | None = None
    grade: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.to_dict()

    def to_dict(self) -> dict[str, Any]:
        """Return only the dimensions that are set."""
        result: dict[str, Any] = {}
        if self.subject:
            result["subject"] = self.subject
        if self.grade:
            result["grade"] = self.grade
        return result
