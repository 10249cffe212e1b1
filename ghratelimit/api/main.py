"""Human-readable view of the GitHub API rate limits for one token.

Every request, whatever its method or path, triggers a single
``GET https://api.github.com/rate_limit``. The response mirrors GitHub's
payload (``resources.core``, ``resources.search``, ``resources.graphql``,
``resources.integration_manifest`` and ``rate``) with each ``reset`` epoch
replaced by a relative time such as ``"about an hour"``, or ``""`` once the
window has already reset. Failures are ``500 text/plain`` with a body of the
form ``"<stage> failed: <error>"``.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from ghratelimit.api.exception_handlers import (
    rate_limit_status_error_handler,
    unhandled_exception_handler,
)
from ghratelimit.api.middleware import RequestLoggingMiddleware
from ghratelimit.api.routes.rate_limit import router as rate_limit_router
from ghratelimit.config import settings
from ghratelimit.exceptions import RateLimitStatusError
from ghratelimit.logging_config import setup_logging

logger = logging.getLogger("ghratelimit")


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.log_level, settings.log_format)
    if not settings.github_token:
        logger.warning("GITHUB_TOKEN is not set; upstream calls will be unauthenticated")
    logger.info("Proxying %s", settings.github_api_url)
    yield


# No docs routes: every path belongs to the rate-limit handler.
app = FastAPI(
    title="GitHub Rate Limit Status",
    version="0.1.0",
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
    lifespan=lifespan,
)

# Exception handlers
app.add_exception_handler(RateLimitStatusError, rate_limit_status_error_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# Request logging
app.add_middleware(RequestLoggingMiddleware)

app.include_router(rate_limit_router)
