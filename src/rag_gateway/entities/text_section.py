"""Prompt section domain entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TextSection:
    """A candidate piece of a prompt; higher priority is packed first."""

    text: str
    priority: int = 0
