"""
Tests for the RAG gateway HTTP API.
"""

import pytest
from fastapi.testclient import TestClient

from conftest import FakeGenerator, FakeRetriever
from rag_gateway.api.app import create_app
from rag_gateway.repositories import InMemoryCacheStore

QUERY_PATH = "/api/rag/query"
PHOTOSYNTHESIS_QUERY = {
    "query": "How does photosynthesis work?",
    "subject": "Biology",
    "grade": "9th",
    "responseFormat": "text",
}


@pytest.fixture
def retriever(photosynthesis_documents):
    return FakeRetriever(photosynthesis_documents, context="Light becomes chemical energy.")


@pytest.fixture
def generator():
    return FakeGenerator()


@pytest.fixture
def client(retriever, generator):
    """Create a test client with fake collaborators."""
    app = create_app(cache_store=InMemoryCacheStore(), retriever=retriever, generator=generator)
    with TestClient(app) as test_client:
        yield test_client


def test_root(client):
    """Test root endpoint."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "RAG Gateway API"
    assert data["endpoints"]["query"] == QUERY_PATH


def test_health(client):
    """The in-memory cache is always healthy."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["cache_healthy"] is True


def test_query_end_to_end(client, retriever, generator):
    """A valid query returns an answer and truncated sources."""
    response = client.post(QUERY_PATH, json=PHOTOSYNTHESIS_QUERY)

    assert response.status_code == 200
    data = response.json()
    assert isinstance(data["answer"], str) and data["answer"]
    assert len(data["sources"]) == 2
    assert all(len(source["content"]) <= 203 for source in data["sources"])
    assert data["sources"][0]["content"].endswith("...")
    assert data["sources"][0]["id"] == "bio-1"
    assert data["sources"][0]["metadata"]["subject"] == "Biology"
    assert len(retriever.calls) == 1
    assert len(generator.calls) == 1


def test_short_query_is_rejected_before_retrieval(client, retriever, generator):
    """Queries under 3 characters get a 400 and touch nothing."""
    response = client.post(QUERY_PATH, json={"query": "hi"})

    assert response.status_code == 400
    assert "query" in response.json()["error"]
    assert retriever.calls == []
    assert generator.calls == []


def test_all_violations_are_reported(client):
    """Every violated constraint appears in the joined message."""
    response = client.post(
        QUERY_PATH,
        json={"query": "ok", "responseFormat": "xml", "maxTokens": -5},
    )

    assert response.status_code == 400
    error = response.json()["error"]
    assert "query" in error
    assert "responseFormat" in error
    assert "maxTokens" in error
    assert error.count(", ") >= 2


def test_invalid_json_body_is_rejected(client):
    """A body that is not a JSON object is a client error."""
    response = client.post(
        QUERY_PATH,
        content=b"not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert "error" in response.json()


def test_wrong_method_is_rejected(client, retriever):
    """Only POST is allowed."""
    response = client.get(QUERY_PATH)

    assert response.status_code == 405
    assert response.json() == {"error": "Method not allowed. Please use POST."}
    assert retriever.calls == []


def test_generator_failure_still_returns_answer(photosynthesis_documents):
    """Generation errors degrade to a fallback answer with status 200."""
    app = create_app(
        cache_store=InMemoryCacheStore(),
        retriever=FakeRetriever(photosynthesis_documents),
        generator=FakeGenerator(error=RuntimeError("upstream 502")),
    )
    with TestClient(app) as client:
        response = client.post(QUERY_PATH, json=PHOTOSYNTHESIS_QUERY)

    assert response.status_code == 200
    assert response.json()["answer"]
    assert len(response.json()["sources"]) == 2


def test_unexpected_failure_returns_500(photosynthesis_documents):
    """Failures outside the degradable steps surface as 500."""

    class ExplodingRetriever(FakeRetriever):
        async def retrieve(self, query, **kwargs):
            return None  # not a RetrievalResult

    app = create_app(
        cache_store=InMemoryCacheStore(),
        retriever=ExplodingRetriever(),
        generator=FakeGenerator(),
    )
    with TestClient(app) as client:
        response = client.post(QUERY_PATH, json=PHOTOSYNTHESIS_QUERY)

    assert response.status_code == 500
    assert response.json()["error"]


def test_repeat_query_is_cached(retriever, generator):
    """An identical query is answered from the cache."""
    store = InMemoryCacheStore()
    app = create_app(cache_store=store, retriever=retriever, generator=generator)

    with TestClient(app) as client:
        first = client.post(QUERY_PATH, json=PHOTOSYNTHESIS_QUERY)
        client.portal.call(app.state.caching_middleware.flush)
        second = client.post(
            QUERY_PATH,
            json={"grade": "9th", "subject": "Biology", "query": "How does photosynthesis work?"},
        )

    assert first.json() == second.json()
    assert len(generator.calls) == 1
    assert len(store) == 1


def test_rejected_queries_are_not_cached(retriever):
    """400 responses never land in the cache."""
    store = InMemoryCacheStore()
    app = create_app(cache_store=store, retriever=retriever, generator=FakeGenerator())

    with TestClient(app) as client:
        client.post(QUERY_PATH, json={"query": "no"})
        client.portal.call(app.state.caching_middleware.flush)

    assert len(store) == 0
