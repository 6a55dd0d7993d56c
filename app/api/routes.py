"""
API route aggregator: register endpoints; no logic, only delegate to handlers.
"""

import logging

from fastapi import APIRouter

from app.api.handlers import handle_search
from app.schemas.search import ErrorResponse, SearchResponse

logger = logging.getLogger(__name__)
router = APIRouter()


# --- System ---

@router.get("/", tags=["system"])
def root():
    return {"status": "Voice search gateway running"}


@router.get("/health", tags=["system"])
def health():
    return {"ok": True}


# --- Search ---

@router.get(
    "/api/search",
    response_model=SearchResponse,
    response_model_exclude_none=True,
    tags=["search"],
    summary="Search the web and narrate the top results",
    description=(
        "Proxy the query to Google Custom Search; return normalized results and a spoken summary. "
        "400 on missing query, 500 when not configured or the request fails, provider status on provider errors."
    ),
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def get_search(query: str | None = None) -> SearchResponse:
    logger.info("[api:get_search] IN  query=%r", query)
    response = await handle_search(query)
    logger.info("[api:get_search] OUT results=%d summary_len=%d", len(response.results), len(response.summary))
    return response
