"""
Tests for the HTTP suggestion agent client.
"""

import asyncio
import json

import httpx
import pytest

from trip_suggestions.entities import Category
from trip_suggestions.errors import (
    UpstreamInvalidResponse,
    UpstreamRejectedRequest,
    UpstreamTimeout,
    UpstreamTransientError,
)
from trip_suggestions.repositories import HttpSuggestionAgent

CANONICAL = {"city": "rome", "category": "food", "cuisines": ["italian", "japanese"]}


def make_agent(handler, api_key="secret"):
    client = httpx.AsyncClient(
        transport=httpx.MockTransport(handler),
        headers={"Authorization": f"Bearer {api_key}"},
    )
    return HttpSuggestionAgent(
        base_url="http://agent.test/",
        api_key=api_key,
        timeout=2.0,
        client=client,
    )


def test_suggest_posts_canonical_request():
    """Test the request body, path and auth header."""
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("Authorization")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"items": [{"name": "Trattoria"}]})

    reply = asyncio.run(make_agent(handler).suggest(Category.FOOD, CANONICAL))

    assert reply == {"items": [{"name": "Trattoria"}]}
    assert seen["method"] == "POST"
    assert seen["url"] == "http://agent.test/v1/suggestions"
    assert seen["auth"] == "Bearer secret"
    assert seen["body"] == {"category": "food", "request": CANONICAL}


@pytest.mark.parametrize(
    ("status_code", "error"),
    [
        (500, UpstreamTransientError),
        (503, UpstreamTransientError),
        (429, UpstreamTransientError),
        (400, UpstreamRejectedRequest),
        (401, UpstreamRejectedRequest),
    ],
)
def test_status_codes_map_to_upstream_errors(status_code, error):
    """Test HTTP statuses are translated into the error taxonomy."""
    agent = make_agent(lambda request: httpx.Response(status_code, json={"detail": "nope"}))

    with pytest.raises(error):
        asyncio.run(agent.suggest(Category.PLACES, CANONICAL))


def test_rejected_request_keeps_status_code():
    """Test the rejected status code is exposed."""
    agent = make_agent(lambda request: httpx.Response(422, json={}))

    with pytest.raises(UpstreamRejectedRequest) as exc_info:
        asyncio.run(agent.suggest(Category.PLACES, CANONICAL))

    assert exc_info.value.status_code == 422


def test_non_json_body_is_invalid():
    """Test a non-JSON body is an invalid response."""
    agent = make_agent(lambda request: httpx.Response(200, text="<html>oops</html>"))

    with pytest.raises(UpstreamInvalidResponse):
        asyncio.run(agent.suggest(Category.PLACES, CANONICAL))


def test_unencodable_request_is_rejected_locally():
    """Test a request that cannot be encoded as JSON never reaches the agent."""
    sent = []
    agent = make_agent(lambda request: sent.append(request) or httpx.Response(200, json=[]))

    with pytest.raises(UpstreamRejectedRequest) as exc_info:
        asyncio.run(agent.suggest(Category.FOOD, {**CANONICAL, "budget_max": float("inf")}))

    assert exc_info.value.status_code is None
    assert sent == []


def test_timeout_and_connection_errors():
    """Test transport failures are translated."""

    def slow(request):
        raise httpx.ReadTimeout("read timed out", request=request)

    def refused(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UpstreamTimeout):
        asyncio.run(make_agent(slow).suggest(Category.PLACES, CANONICAL))

    with pytest.raises(UpstreamTransientError):
        asyncio.run(make_agent(refused).suggest(Category.PLACES, CANONICAL))


def test_is_available():
    """Test the health endpoint check."""

    def healthy(request):
        assert request.url.path == "/health"
        return httpx.Response(200, json={"status": "ok"})

    def refused(request):
        raise httpx.ConnectError("connection refused", request=request)

    assert asyncio.run(make_agent(healthy).is_available()) is True
    assert asyncio.run(make_agent(lambda r: httpx.Response(503)).is_available()) is False
    assert asyncio.run(make_agent(refused).is_available()) is False


def test_close_releases_client():
    """Test close drops the client so it is rebuilt lazily."""
    agent = make_agent(lambda request: httpx.Response(200, json=[]))

    asyncio.run(agent.close())

    assert agent._client is None


def test_explicit_zero_timeout_is_kept():
    """Test a zero timeout is not replaced by the configured default."""
    agent = HttpSuggestionAgent(base_url="http://agent.test", timeout=0)

    assert agent.client.timeout.read == 0
