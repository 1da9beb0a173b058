"""
Shared fakes for the RAG gateway tests.
"""

import pytest

from rag_gateway.entities import Message, MetadataFilter, RetrievalResult, RetrievedDocument
from rag_gateway.repositories import InMemoryCacheStore


class FakeRetriever:
    """Retriever returning a fixed result and recording its calls."""

    def __init__(self, documents=None, context="", error=None):
        self.documents = documents or []
        self.context = context
        self.error = error
        self.calls = []

    async def retrieve(
        self,
        query: str,
        *,
        metadata_filter: MetadataFilter | None = None,
        top_k: int = 3,
        max_context_tokens: int = 2000,
    ) -> RetrievalResult:
        self.calls.append(
            {
                "query": query,
                "metadata_filter": metadata_filter,
                "top_k": top_k,
                "max_context_tokens": max_context_tokens,
            }
        )
        if self.error is not None:
            raise self.error
        return RetrievalResult(documents=list(self.documents), context=self.context)


class FakeGenerator:
    """Generator returning a canned answer and recording its calls."""

    def __init__(self, answer="Plants turn light into chemical energy.", error=None):
        self.answer = answer
        self.error = error
        self.calls = []

    async def generate(
        self,
        messages: list[Message],
        *,
        max_tokens: int,
        temperature: float,
        response_format: str = "text",
    ) -> str:
        self.calls.append(
            {
                "messages": messages,
                "max_tokens": max_tokens,
                "temperature": temperature,
                "response_format": response_format,
            }
        )
        if self.error is not None:
            raise self.error
        return self.answer


class FakeClock:
    """Manually advanced Unix clock."""

    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def photosynthesis_documents():
    """Two documents, one long enough to need a preview cut."""
    return [
        RetrievedDocument(
            id="bio-1",
            content="Photosynthesis converts light energy into chemical energy. " * 10,
            metadata={"subject": "Biology", "grade": "9th", "score": 0.92},
        ),
        RetrievedDocument(
            id="bio-2",
            content="Chlorophyll absorbs mostly blue and red light.",
            metadata={"subject": "Biology", "grade": "9th", "score": 0.81},
        ),
    ]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache_store(clock):
    return InMemoryCacheStore(clock=clock)
