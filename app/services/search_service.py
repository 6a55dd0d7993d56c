"""
Search: validate the query, call Google Custom Search, normalize the items.

Responsibility: Everything between the HTTP request and the SearchResponse.
Raises GatewayError subclasses; no FastAPI or HTTP response types here.
"""

import logging
from typing import Any

import httpx

from app.core.config import GOOGLE_SEARCH_URL
from app.core.errors import ConfigurationError, ProviderError, TransportError, ValidationError
from app.schemas.search import SearchResponse, SearchResult
from app.services.narration import summarize_results

logger = logging.getLogger(__name__)

MISSING_QUERY_MESSAGE = "Missing query"
NOT_CONFIGURED_MESSAGE = (
    "Search service is not configured. Please add GOOGLE_API_KEY and GOOGLE_CSE_ID to the environment."
)
PROVIDER_ERROR_MESSAGE = "Google Search API error"
TRANSPORT_ERROR_MESSAGE = "Search request failed"


def validate_query(query: str | None) -> str:
    """Return the query unchanged if it has any non-blank content; raise ValidationError otherwise."""
    if not query or not query.strip():
        raise ValidationError(MISSING_QUERY_MESSAGE)
    return query


def ensure_configured(api_key: str, cse_id: str) -> None:
    """Raise ConfigurationError unless both provider credentials are set."""
    if not api_key or not cse_id:
        raise ConfigurationError(NOT_CONFIGURED_MESSAGE)


def provider_error_message(payload: Any) -> str:
    """
    Pick the message to forward from a provider error body.

    A plain string "error" is used as-is. Google's own envelope nests it as
    {"error": {"code": ..., "message": ...}}, so a string "message" inside an
    object is used too. Anything else falls back to the generic message.
    """
    if not isinstance(payload, dict):
        return PROVIDER_ERROR_MESSAGE
    error = payload.get("error")
    if isinstance(error, str):
        return error
    if isinstance(error, dict) and isinstance(error.get("message"), str):
        return error["message"]
    return PROVIDER_ERROR_MESSAGE


def map_items(payload: Any) -> list[SearchResult]:
    """
    Map provider items to SearchResult, keeping order. Missing "items" means no results.

    Raises ValueError when "items" is not a list or an item is not an object.
    """
    items = payload.get("items") if isinstance(payload, dict) else None
    if items is not None and not isinstance(items, list):
        raise ValueError(f"Unexpected search items: {items!r}")
    results: list[SearchResult] = []
    for item in items or []:
        if not isinstance(item, dict):
            raise ValueError(f"Unexpected search item: {item!r}")
        results.append(
            SearchResult(
                title=item.get("title") or "",
                link=item.get("link") or "",
                snippet=item.get("snippet") or "",
                display_link=item.get("displayLink"),
            )
        )
    return results


async def _get(client: httpx.AsyncClient, query: str, api_key: str, cse_id: str) -> httpx.Response:
    return await client.get(
        GOOGLE_SEARCH_URL,
        params={"key": api_key, "cx": cse_id, "q": query},
        headers={"Content-Type": "application/json", "Cache-Control": "no-store"},
    )


async def fetch_google_results(
    query: str,
    *,
    api_key: str,
    cse_id: str,
    client: httpx.AsyncClient | None = None,
) -> list[SearchResult]:
    """
    Run one uncached Google Custom Search request and return normalized results.

    Args:
        query: Search text, sent as received.
        api_key: Google API key.
        cse_id: Programmable Search Engine id (cx).
        client: Optional shared AsyncClient; a short-lived one is opened otherwise.

    Raises:
        ProviderError: Google answered with a non-success status (status forwarded).
        TransportError: The request failed or the success body was unreadable.
    """
    try:
        if client is None:
            async with httpx.AsyncClient() as own_client:
                response = await _get(own_client, query, api_key, cse_id)
        else:
            response = await _get(client, query, api_key, cse_id)

        if not response.is_success:
            try:
                error_payload = response.json()
            except ValueError:
                error_payload = {}
            message = provider_error_message(error_payload)
            logger.warning("[search:google] provider error %s: %s", response.status_code, message)
            raise ProviderError(message, status_code=response.status_code)

        results = map_items(response.json())
    except (httpx.HTTPError, ValueError) as e:
        logger.exception("[search:google] request failed")
        raise TransportError(TRANSPORT_ERROR_MESSAGE) from e

    logger.info("[search:google] OUT results=%d", len(results))
    return results


async def run_search(
    query: str | None,
    *,
    api_key: str,
    cse_id: str,
    client: httpx.AsyncClient | None = None,
) -> SearchResponse:
    """
    Validate, check credentials, search, and narrate.

    Validation runs before the credential check, and both run before any
    network call.
    """
    query = validate_query(query)
    ensure_configured(api_key, cse_id)
    logger.info("[search:run_search] IN  query=%r", query)
    results = await fetch_google_results(query, api_key=api_key, cse_id=cse_id, client=client)
    return SearchResponse(results=results, summary=summarize_results(query, results))
