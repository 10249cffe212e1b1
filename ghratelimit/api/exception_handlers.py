"""Global exception handlers returning plain-text error bodies."""

from __future__ import annotations

import logging
import traceback

from fastapi import Request
from fastapi.responses import PlainTextResponse

from ghratelimit.api.middleware import correlation_headers
from ghratelimit.exceptions import RateLimitStatusError
from ghratelimit.services.request_context import bound_request_id

logger = logging.getLogger("ghratelimit.errors")


async def rate_limit_status_error_handler(
    request: Request, exc: RateLimitStatusError
) -> PlainTextResponse:
    """Map any proxy failure to a 500 whose body is ``"<stage> failed: <error>"``."""
    logger.warning(
        "%s %s aborted: %s",
        request.method,
        request.url.path,
        exc,
        extra={"stage": exc.stage},
    )
    return PlainTextResponse(str(exc), status_code=500)


async def unhandled_exception_handler(
    request: Request, exc: Exception
) -> PlainTextResponse:
    """Catch-all for unhandled exceptions.

    Logs the full traceback server-side but returns a generic 500 response
    with no internal details leaked.  Runs outside the request-logging
    middleware, so the correlation headers are added here.
    """
    headers = correlation_headers(request)
    with bound_request_id(headers.get("X-Request-ID", "")):
        logger.error(
            "Unhandled exception on %s %s:\n%s",
            request.method,
            request.url.path,
            "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
        )

    return PlainTextResponse("Internal server error", status_code=500, headers=headers)
