"""
API handlers: read request data, call services, map results/errors to HTTP.

Responsibility: Bridge HTTP types and services. Marshalling and exception-to-HTTP mapping.
Lives in the API layer so services stay free of FastAPI/HTTP types.
"""

from fastapi import Request
from fastapi.responses import JSONResponse

from app.core.config import GOOGLE_API_KEY, GOOGLE_CSE_ID
from app.core.errors import GatewayError
from app.schemas.search import ErrorResponse, SearchResponse
from app.services.search_service import run_search


async def handle_search(query: str | None) -> SearchResponse:
    """Run a search with the credentials loaded at startup."""
    return await run_search(query, api_key=GOOGLE_API_KEY, cse_id=GOOGLE_CSE_ID)


async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
    """Render any GatewayError as {"error": message} with its status code."""
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=exc.message).model_dump(),
    )
