"""RAG orchestration service.

Runs one query through retrieval, budgeted prompt construction and
generation. Failures of the external collaborators degrade the answer
instead of failing the request: no documents means an ungrounded answer,
no generator means a labelled fallback answer.
"""

import json
import logging

from rag_gateway.config import settings
from rag_gateway.dto import QueryRequest, QueryResponse, SourceItem
from rag_gateway.entities import Message, MetadataFilter, RetrievalResult, RetrievedDocument, TextSection
from rag_gateway.protocols import AnswerGenerator, DocumentRetriever
from rag_gateway.utils import estimate_conversation_tokens, optimize_prompt

logger = logging.getLogger(__name__)

SYSTEM_INSTRUCTION = (
    "You are an AI teaching assistant helping educators create teaching materials. "
    "Provide focused, accurate, and helpful responses."
)
NO_CONTEXT_NOTICE = "No supporting documents were found for this query."
FALLBACK_LABEL = "[Fallback answer - the answer generator is currently unavailable]"
SOURCE_PREVIEW_CHARS = 200
ELLIPSIS = "..."


class RagService:
    """Stateless per-request RAG pipeline.

    Example:
        ```python
        service = RagService.create(
            retriever=InMemoryDocumentRetriever(corpus),
            generator=OpenRouterAnswerGenerator.create(),
        )
        response = await service.answer(request)
        ```
    """

    def __init__(
        self,
        retriever: DocumentRetriever,
        generator: AnswerGenerator,
        top_k: int | None = None,
        max_context_tokens: int | None = None,
        prompt_token_budget: int | None = None,
        default_max_tokens: int | None = None,
        temperature: float | None = None,
        token_model: str | None = None,
    ) -> None:
        """Initialize the RAG service.

        Args:
            retriever: Document retrieval backend (required).
            generator: Answer generation backend (required).
            top_k: Documents to retrieve. Defaults to settings.
            max_context_tokens: Token budget of the retrieved context. Defaults to settings.
            prompt_token_budget: Token budget of the whole user prompt. Defaults to settings.
            default_max_tokens: Generation limit when the request sets none. Defaults to settings.
            temperature: Sampling temperature. Defaults to settings.
            token_model: Model profile used for estimation. Defaults to settings.
        """
        self._retriever = retriever
        self._generator = generator
        self._top_k = top_k or settings.retriever_top_k
        self._max_context_tokens = max_context_tokens or settings.retriever_max_context_tokens
        self._prompt_token_budget = prompt_token_budget or settings.prompt_token_budget
        self._default_max_tokens = default_max_tokens or settings.generator_default_max_tokens
        self._temperature = settings.generator_temperature if temperature is None else temperature
        self._token_model = token_model or settings.token_model

    @classmethod
    def create(
        cls,
        retriever: DocumentRetriever,
        generator: AnswerGenerator,
    ) -> "RagService":
        """Factory method to create RagService with limits from settings."""
        return cls(retriever=retriever, generator=generator)

    async def answer(self, request: QueryRequest) -> QueryResponse:
        """Answer a validated query.

        Business logic:
        1. Retrieve documents matching the optional subject/grade filter
        2. Pack instruction, context and query into the prompt budget
        3. Generate the answer (or a fallback)
        4. Attach truncated source previews

        Args:
            request: The validated query request

        Returns:
            QueryResponse with answer and sources
        """
        retrieval = await self._retrieve(request.query, request.metadata_filter())
        prompt = self.build_prompt(request.query, retrieval.context)

        messages = [
            Message(role="system", content=SYSTEM_INSTRUCTION),
            Message(role="user", content=prompt),
        ]
        answer = await self._generate(
            messages,
            query=request.query,
            max_tokens=request.max_tokens or self._default_max_tokens,
            response_format=request.response_format,
        )

        return QueryResponse(
            answer=answer,
            sources=[self.shape_source(document) for document in retrieval.documents],
        )

    async def _retrieve(
        self,
        query: str,
        metadata_filter: MetadataFilter | None,
    ) -> RetrievalResult:
        try:
            return await self._retriever.retrieve(
                query,
                metadata_filter=metadata_filter,
                top_k=self._top_k,
                max_context_tokens=self._max_context_tokens,
            )
        except Exception as e:
            logger.warning("Retrieval failed, answering without context: %s", e)
            return RetrievalResult.empty()

    def build_prompt(self, query: str, context: str) -> str:
        """Combine query and context into the user prompt.

        The instruction and query outrank the retrieved context, which
        outranks the closing guidance, so an oversized context is cut
        before the query is ever touched.
        """
        sections = [
            TextSection(
                text=(
                    "You are an AI teaching assistant helping educators create teaching materials.\n\n"
                    f"User query: {query}\n\n"
                ),
                priority=3,
            ),
            TextSection(
                text=(
                    "Here is relevant information to help answer the query:\n\n"
                    f"{context or NO_CONTEXT_NOTICE}\n\n"
                ),
                priority=2,
            ),
            TextSection(
                text=(
                    "Please provide a helpful, accurate response based on the information above. "
                    "If the information doesn't contain enough details to answer the query "
                    "completely, say so and provide the best response you can with the "
                    "available information."
                ),
                priority=1,
            ),
        ]
        return optimize_prompt(sections, self._prompt_token_budget, self._token_model)

    async def _generate(
        self,
        messages: list[Message],
        *,
        query: str,
        max_tokens: int,
        response_format: str,
    ) -> str:
        logger.debug(
            "Generating with ~%d prompt tokens, max_tokens=%d",
            estimate_conversation_tokens(messages, self._token_model),
            max_tokens,
        )
        try:
            return await self._generator.generate(
                messages,
                max_tokens=max_tokens,
                temperature=self._temperature,
                response_format=response_format,
            )
        except Exception as e:
            logger.warning("Answer generation failed, using fallback answer: %s", e)
            return self.fallback_answer(query, response_format == "json")

    @staticmethod
    def fallback_answer(query: str, as_json: bool = False) -> str:
        """Build the clearly labelled placeholder used when generation fails."""
        content = (
            f'No generated answer is available right now for the query: "{query}". '
            "Please try again later."
        )
        if as_json:
            return json.dumps({"title": "Fallback Response", "content": content, "items": []})
        return f"{FALLBACK_LABEL}\n\n{content}"

    @staticmethod
    def shape_source(document: RetrievedDocument) -> SourceItem:
        """Build a client-facing copy of a document with a content preview."""
        content = document.content[:SOURCE_PREVIEW_CHARS]
        if len(document.content) > SOURCE_PREVIEW_CHARS:
            content += ELLIPSIS
        return SourceItem(id=document.id, content=content, metadata=dict(document.metadata))
