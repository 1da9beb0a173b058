"""Answer generator protocol."""

from typing import Literal, Protocol, runtime_checkable

from rag_gateway.entities import Message

ResponseFormat = Literal["text", "json"]


@runtime_checkable
class AnswerGenerator(Protocol):
    """Protocol for chat-style text generation backends."""

    async def generate(
        self,
        messages: list[Message],
        *,
        max_tokens: int,
        temperature: float,
        response_format: ResponseFormat = "text",
    ) -> str:
        """Generate a reply to ``messages``.

        Args:
            messages: Ordered conversation
            max_tokens: Maximum tokens to generate
            temperature: Sampling temperature
            response_format: ``json`` asks the model for a JSON object

        Returns:
            The generated text

        Raises:
            RuntimeError: On transport or non-success responses
        """
        ...
