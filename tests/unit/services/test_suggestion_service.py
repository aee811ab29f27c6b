"""Unit tests for the suggestion pipeline with an in-memory backend."""

from __future__ import annotations

import pytest

from suggest_relay.schemas.suggest import PLACEHOLDER_SUGGESTION
from suggest_relay.services.metrics import metrics
from suggest_relay.services.suggest import SuggestionService
from suggest_relay.utils.errors import AuthenticationFailed, UpstreamError


class StubBackend:
    """Return a canned payload or raise a canned error, recording queries."""

    def __init__(self, payload: object = None, error: Exception | None = None) -> None:
        self.payload = payload
        self.error = error
        self.queries: list[str] = []

    async def fetch(self, query: str) -> object:
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        return self.payload


@pytest.fixture(autouse=True)
def _reset_metrics() -> None:
    metrics.reset()


@pytest.mark.anyio
async def test_query_is_trimmed_before_relaying() -> None:
    backend = StubBackend(payload={"values": []})
    service = SuggestionService(backend, base_url="https://relay.test")

    await service.suggest("  annual report \n")

    assert backend.queries == ["annual report"]


@pytest.mark.anyio
@pytest.mark.parametrize("raw", [None, "", "   "])
async def test_blank_query_skips_backend(raw) -> None:
    backend = StubBackend(payload={"values": []})
    service = SuggestionService(backend, base_url="https://relay.test")

    result = await service.suggest(raw)

    assert result.to_payload() == {"Suggestions": []}
    assert backend.queries == []


@pytest.mark.anyio
async def test_auth_failure_sets_error_field() -> None:
    service = SuggestionService(
        StubBackend(error=AuthenticationFailed("Auth failed")), base_url="https://relay.test"
    )

    result = await service.suggest("foo")

    assert result.to_payload() == {"Suggestions": [], "Error": "Auth failed"}
    assert 'suggest_requests_total{outcome="auth_failed"} 1.0' in metrics.render().decode()


@pytest.mark.anyio
async def test_upstream_error_returns_empty_list_without_error_field() -> None:
    service = SuggestionService(
        StubBackend(error=UpstreamError("down", details={"status_code": 500})),
        base_url="https://relay.test",
    )

    result = await service.suggest("foo")

    assert result.to_payload() == {"Suggestions": []}


@pytest.mark.anyio
@pytest.mark.parametrize("payload", [[], "text", 12, None])
async def test_non_object_payload_returns_empty_list(payload) -> None:
    service = SuggestionService(StubBackend(payload=payload), base_url="https://relay.test")

    result = await service.suggest("foo")

    assert result.Suggestions == []


def test_url_is_plain_concatenation() -> None:
    service = SuggestionService(StubBackend(), base_url="https://relay.test/")

    suggestions = service.build_suggestions(
        {"values": [{"common.title": "Foo", "displayurl": "/x/y"}]}
    )

    assert suggestions[0] == PLACEHOLDER_SUGGESTION
    assert suggestions[1].Attributes.url == "https://relay.test//x/y"
    assert suggestions[1].Attributes.previewPaneUrl == "https://relay.test//x/y"
    assert suggestions[1].Attributes.query == "Foo"


def test_skipped_items_are_counted() -> None:
    service = SuggestionService(StubBackend(), base_url="https://relay.test")

    suggestions = service.build_suggestions(
        {"values": [{"common.title": "Foo"}, None, {"common.title": "Bar", "displayurl": "/b"}]}
    )

    assert [suggestion.Text for suggestion in suggestions] == [
        PLACEHOLDER_SUGGESTION.Text,
        "Bar",
    ]
    assert "suggest_items_skipped_total 2.0" in metrics.render().decode()
