"""OpenAI-compatible chat completions client.

Talks to OpenRouter by default, but any endpoint implementing
``POST {base_url}/chat/completions`` works.
"""

import httpx

from rag_gateway.config import settings
from rag_gateway.entities import Message
from rag_gateway.protocols.answer_generator import ResponseFormat

EMPTY_COMPLETION = "No response generated"


class OpenRouterAnswerGenerator:
    """HTTP implementation of the AnswerGenerator protocol.

    Example:
        ```python
        generator = OpenRouterAnswerGenerator.create()
        text = await generator.generate(
            [Message("user", "Explain photosynthesis")],
            max_tokens=500,
            temperature=0.7,
        )
        ```
    """

    def __init__(
        self,
        api_key: str | None = None,
        model_name: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the generator client.

        Args:
            api_key: Bearer token. Defaults to settings.generator_api_key.
            model_name: Model identifier. Defaults to settings.generator_model.
            base_url: API base URL. Defaults to settings.generator_base_url.
            timeout: Request timeout in seconds. Defaults to settings.generator_timeout.
            http_client: Preconfigured client. If None, one is created lazily.
        """
        self._api_key = api_key or settings.generator_api_key
        self._model_name = model_name or settings.generator_model
        self._base_url = (base_url or settings.generator_base_url).rstrip("/")
        self._timeout = timeout or settings.generator_timeout
        self._client: httpx.AsyncClient | None = http_client

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
            )
        return self._client

    @classmethod
    def create(
        cls,
        api_key: str | None = None,
        model_name: str | None = None,
    ) -> "OpenRouterAnswerGenerator":
        """Factory method to create OpenRouterAnswerGenerator with defaults."""
        return cls(api_key=api_key, model_name=model_name)

    @property
    def model_name(self) -> str:
        return self._model_name

    async def generate(
        self,
        messages: list[Message],
        *,
        max_tokens: int,
        temperature: float,
        response_format: ResponseFormat = "text",
    ) -> str:
        """Request a chat completion.

        Raises:
            RuntimeError: If no API key is configured, the request fails,
                or the response cannot be parsed
        """
        if not self._api_key:
            raise RuntimeError("Generator API key is not configured (set GENERATOR_API_KEY)")

        payload: dict = {
            "model": self._model_name,
            "messages": [message.to_dict() for message in messages],
            "max_tokens": max_tokens,
            "temperature": temperature,
        }
        if response_format == "json":
            payload["response_format"] = {"type": "json_object"}

        try:
            response = await self.client.post(
                f"{self._base_url}/chat/completions",
                json=payload,
                headers={"Authorization": f"Bearer {self._api_key}"},
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise RuntimeError(
                f"Generator API error {e.response.status_code}: {e.response.text}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise RuntimeError(f"Generator API error: {e}") from e

        try:
            choices = data.get("choices") or []
            content = choices[0]["message"]["content"] if choices else None
        except (KeyError, TypeError, IndexError, AttributeError) as e:
            raise RuntimeError(f"Unexpected generator response format: {data}") from e

        if content is not None and not isinstance(content, str):
            raise RuntimeError(f"Unexpected generator content type: {type(content).__name__}")

        return content or EMPTY_COMPLETION

    async def close(self) -> None:
        """Close the async HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
