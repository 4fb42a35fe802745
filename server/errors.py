"""Maps provider and production failures to HTTP responses"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from core.producer import ReelProductionError
from core.providers.base import ProviderError

logger = logging.getLogger(__name__)


def provider_error_response(error: Exception) -> JSONResponse:
    """Rate limits become 429 with a retry hint, anything else 500."""
    logger.error(f"AI provider error: {error}")
    if isinstance(error, ProviderError) and error.is_rate_limited:
        message = "You've exceeded the API request limit. Please wait a moment and try again."
        if error.retry_delay:
            message = f"API rate limit exceeded. Please wait for {error.retry_delay} before trying again."
        return JSONResponse(status_code=429, content={"error": message})
    return JSONResponse(
        status_code=500,
        content={"error": f"An error occurred with the AI model: {error}"},
    )


async def handle_provider_error(request: Request, exc: ProviderError) -> JSONResponse:
    return provider_error_response(exc)


async def handle_production_error(request: Request, exc: ReelProductionError) -> JSONResponse:
    logger.error(f"Reel production failed: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": str(exc), "kind": exc.result.error_kind},
    )
