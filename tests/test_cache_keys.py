"""
Tests for cache key generation.
"""

from rag_gateway.entities import RequestContext
from rag_gateway.middleware import CacheKeyGenerator, generate_cache_key, rag_cache_key


def test_base_key_without_query():
    """Keys start with method and path."""
    request = RequestContext(method="get", path="/x")
    assert generate_cache_key(request) == "cache:GET:/x"


def test_query_parameter_order_is_irrelevant():
    """Parameter order never changes the key."""
    first = RequestContext(method="GET", path="/x", query={"b": "2", "a": "1"})
    second = RequestContext(method="GET", path="/x", query={"a": "1", "b": "2"})
    assert generate_cache_key(first) == generate_cache_key(second)
    assert generate_cache_key(first) == "cache:GET:/x?a=1&b=2"


def test_different_requests_get_different_keys():
    """Method, path and parameter values all matter."""
    base = RequestContext(method="GET", path="/x", query={"a": "1"})
    assert generate_cache_key(base) != generate_cache_key(
        RequestContext(method="POST", path="/x", query={"a": "1"})
    )
    assert generate_cache_key(base) != generate_cache_key(
        RequestContext(method="GET", path="/y", query={"a": "1"})
    )
    assert generate_cache_key(base) != generate_cache_key(
        RequestContext(method="GET", path="/x", query={"a": "2"})
    )


def test_body_is_folded_in_canonically():
    """Body key order does not matter, body content does."""
    keys = CacheKeyGenerator(include_body=True)
    first = RequestContext(method="POST", path="/q", body={"query": "cells", "grade": "9th"})
    second = RequestContext(method="POST", path="/q", body={"grade": "9th", "query": "cells"})
    other = RequestContext(method="POST", path="/q", body={"grade": "10th", "query": "cells"})
    assert keys.generate(first) == keys.generate(second)
    assert keys.generate(first) != keys.generate(other)


def test_only_allowlisted_headers_are_used():
    """Allow-listed headers split the cache, other headers never do."""
    keys = CacheKeyGenerator(header_allowlist=["Accept-Language"])
    english = RequestContext(
        method="GET",
        path="/x",
        headers={"accept-language": "en", "x-request-id": "abc", "date": "Mon"},
    )
    english_again = RequestContext(
        method="GET",
        path="/x",
        headers={"accept-language": "en", "x-request-id": "def", "date": "Tue"},
    )
    french = RequestContext(method="GET", path="/x", headers={"accept-language": "fr"})

    assert keys.generate(english) == keys.generate(english_again)
    assert keys.generate(english) != keys.generate(french)
    assert "abc" not in keys.generate(english)


def test_extended_mode_splits_on_accept_language_by_default():
    """Extended keys fold in accept-language without explicit configuration."""
    keys = CacheKeyGenerator(include_body=True)
    french = RequestContext(method="GET", path="/x", headers={"accept-language": "fr"})
    english = RequestContext(method="GET", path="/x", headers={"accept-language": "en"})

    assert keys.generate(french) != keys.generate(english)
    assert generate_cache_key(french) == generate_cache_key(english) == "cache:GET:/x"


def test_rag_key_uses_query_subject_and_grade():
    """RAG keys depend on the triple only."""
    request = RequestContext(
        method="POST",
        path="/api/rag/query",
        body={"query": "What is osmosis?", "subject": "Biology", "grade": "9th"},
    )
    same = RequestContext(
        method="POST",
        path="/api/rag/query",
        body={"grade": "9th", "subject": "Biology", "query": "What is osmosis?"},
    )
    other_grade = RequestContext(
        method="POST",
        path="/api/rag/query",
        body={"query": "What is osmosis?", "subject": "Biology", "grade": "10th"},
    )
    assert rag_cache_key(request) == rag_cache_key(same)
    assert rag_cache_key(request) != rag_cache_key(other_grade)
    assert rag_cache_key(request).startswith("rag:")


def test_rag_key_separator_collisions():
    """Values containing separators cannot impersonate other triples."""
    first = RequestContext(method="POST", path="/q", body={"query": "a:b", "subject": ""})
    second = RequestContext(method="POST", path="/q", body={"query": "a", "subject": "b"})
    assert rag_cache_key(first) != rag_cache_key(second)


def test_rag_key_tolerates_non_object_body():
    """A malformed body still yields a key (validation rejects it later)."""
    request = RequestContext(method="POST", path="/q", body=["not", "an", "object"])
    assert rag_cache_key(request).startswith("rag:")
