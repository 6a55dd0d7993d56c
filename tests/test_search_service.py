"""
Unit tests for the search service: validation, provider call, item mapping.

The provider is served by httpx.MockTransport; coroutines run with asyncio.run.
"""

import asyncio

import httpx
import pytest

from app.core.errors import ConfigurationError, ProviderError, TransportError, ValidationError
from app.services.search_service import (
    fetch_google_results,
    map_items,
    provider_error_message,
    run_search,
    validate_query,
)


def _mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def _fetch(handler, query: str = "weather"):
    async def go():
        async with _mock_client(handler) as client:
            return await fetch_google_results(query, api_key="k", cse_id="cx", client=client)

    return asyncio.run(go())


ITEMS = [
    {"title": f"Title {i}", "link": f"https://example.com/{i}", "snippet": f"Snippet {i}", "displayLink": "example.com"}
    for i in range(1, 6)
]


class TestValidateQuery:
    def test_blank_raises(self) -> None:
        for value in (None, "", "   ", "\n\t"):
            with pytest.raises(ValidationError) as exc:
                validate_query(value)
            assert exc.value.status_code == 400
            assert exc.value.message == "Missing query"

    def test_returns_query_unchanged(self) -> None:
        assert validate_query("  weather ") == "  weather "


class TestFetchGoogleResults:
    def test_sends_key_cx_and_query(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"items": ITEMS})

        results = _fetch(handler)
        assert len(seen) == 1
        params = seen[0].url.params
        assert (params["key"], params["cx"], params["q"]) == ("k", "cx", "weather")
        assert seen[0].url.host == "www.googleapis.com"
        assert [r.link for r in results] == [item["link"] for item in ITEMS]

    def test_fields_copied_verbatim(self) -> None:
        results = _fetch(lambda request: httpx.Response(200, json={"items": ITEMS}))
        for item, result in zip(ITEMS, results):
            assert result.title == item["title"]
            assert result.link == item["link"]
            assert result.snippet == item["snippet"]
            assert result.display_link == item["displayLink"]

    def test_missing_items_is_empty(self) -> None:
        assert _fetch(lambda request: httpx.Response(200, json={"kind": "customsearch#search"})) == []

    def test_provider_error_string_forwarded_with_status(self) -> None:
        with pytest.raises(ProviderError) as exc:
            _fetch(lambda request: httpx.Response(403, json={"error": "quota exceeded"}))
        assert exc.value.status_code == 403
        assert exc.value.message == "quota exceeded"

    def test_provider_structured_error_uses_message(self) -> None:
        body = {"error": {"code": 400, "message": "API key not valid.", "status": "INVALID_ARGUMENT"}}
        with pytest.raises(ProviderError) as exc:
            _fetch(lambda request: httpx.Response(400, json=body))
        assert exc.value.status_code == 400
        assert exc.value.message == "API key not valid."

    def test_provider_unparseable_error_is_generic(self) -> None:
        with pytest.raises(ProviderError) as exc:
            _fetch(lambda request: httpx.Response(502, text="<html>Bad Gateway</html>"))
        assert exc.value.status_code == 502
        assert exc.value.message == "Google Search API error"

    def test_network_failure_is_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(TransportError) as exc:
            _fetch(handler)
        assert exc.value.status_code == 500
        assert exc.value.message == "Search request failed"

    def test_unparseable_success_is_transport_error(self) -> None:
        with pytest.raises(TransportError):
            _fetch(lambda request: httpx.Response(200, text="not json"))


class TestProviderErrorMessage:
    def test_non_string_error_falls_back(self) -> None:
        assert provider_error_message({"error": 42}) == "Google Search API error"
        assert provider_error_message({"error": {"code": 500}}) == "Google Search API error"
        assert provider_error_message([]) == "Google Search API error"


class TestMapItems:
    def test_keeps_order_and_duplicates(self) -> None:
        items = [ITEMS[1], ITEMS[0], ITEMS[1]]
        assert [r.title for r in map_items({"items": items})] == ["Title 2", "Title 1", "Title 2"]

    def test_null_items_is_empty(self) -> None:
        assert map_items({"items": None}) == []

    def test_non_object_item_raises(self) -> None:
        with pytest.raises(ValueError):
            map_items({"items": ["oops"]})

    @pytest.mark.parametrize("items", [5, True, "abc", {"title": "A"}])
    def test_non_list_items_raises(self, items) -> None:
        with pytest.raises(ValueError):
            map_items({"items": items})

    def test_non_list_items_is_transport_error(self) -> None:
        with pytest.raises(TransportError):
            _fetch(lambda request: httpx.Response(200, json={"items": 5}))


class TestRunSearch:
    def test_credentials_checked_before_network(self) -> None:
        calls: list[httpx.Request] = []

        async def go():
            async with _mock_client(lambda request: calls.append(request) or httpx.Response(200, json={})) as client:
                await run_search("news", api_key="", cse_id="cx", client=client)

        with pytest.raises(ConfigurationError):
            asyncio.run(go())
        assert calls == []

    def test_builds_summary(self) -> None:
        async def go():
            async with _mock_client(lambda request: httpx.Response(200, json={"items": ITEMS[:2]})) as client:
                return await run_search("weather", api_key="k", cse_id="cx", client=client)

        response = asyncio.run(go())
        assert len(response.results) == 2
        assert response.summary == "Here is what I found for weather. Title 1. Snippet 1 Title 2. Snippet 2"
