"""Model profile domain entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ModelProfile:
    """Character-per-token ratio used to approximate a model's tokenizer.

    Attributes:
        name: Model identifier
        chars_per_token: Average characters per token (must be > 0)
    """

    name: str
    chars_per_token: float

    def __post_init__(self) -> None:
        if self.chars_per_token <= 0:
            raise ValueError(f"chars_per_token must be positive, got {self.chars_per_token}")
