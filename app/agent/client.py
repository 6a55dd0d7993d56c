"""
HTTP client for the search gateway, used by the agent controller and the UI.
"""

import logging

import requests

from app.core.config import API_BASE, CLIENT_HTTP_TIMEOUT
from app.schemas.search import SearchResponse

logger = logging.getLogger(__name__)

SEARCH_FAILED_MESSAGE = "Search failed. Please try again."
FALLBACK_SUMMARY = "Here are your search results."


class SearchClientError(Exception):
    """Raised when a gateway search does not produce results; message is shown to the user."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class SearchClient:
    """Calls GET /api/search on the gateway. One request per search, no retries."""

    def __init__(
        self,
        base_url: str = API_BASE,
        session: requests.Session | None = None,
        timeout: float = CLIENT_HTTP_TIMEOUT,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def search(self, query: str) -> SearchResponse:
        """
        Search for the trimmed query.

        Raises:
            SearchClientError: Gateway unreachable, or answered with an error
                (its "error" text when present, a generic message otherwise).
        """
        query = query.strip()
        logger.info("[client:search] IN  query=%r", query)
        try:
            r = self.session.get(f"{self.base_url}/api/search", params={"query": query}, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning("[client:search] request failed: %s", e)
            raise SearchClientError(str(e) or SEARCH_FAILED_MESSAGE) from e
        if not r.ok:
            try:
                payload = r.json()
            except ValueError:
                payload = {}
            message = payload.get("error") if isinstance(payload, dict) else None
            logger.info("[client:search] gateway error %s: %r", r.status_code, message)
            raise SearchClientError(message or SEARCH_FAILED_MESSAGE, status_code=r.status_code)
        try:
            data = r.json()
            response = SearchResponse(
                results=data.get("results") or [],
                summary=data.get("summary") or FALLBACK_SUMMARY,
            )
        except (ValueError, AttributeError) as e:
            logger.warning("[client:search] unreadable response: %s", e)
            raise SearchClientError(SEARCH_FAILED_MESSAGE, status_code=r.status_code) from e
        logger.info("[client:search] OUT results=%d", len(response.results))
        return response
