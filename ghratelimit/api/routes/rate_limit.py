"""Catch-all handler: every method on every path reports the rate-limit status."""

from __future__ import annotations

from fastapi import APIRouter
from starlette.requests import Request
from starlette.responses import Response

from ghratelimit.api.dependencies import get_github_client, get_now, resolve
from ghratelimit.services.rate_limit_serializer import encode_response

router = APIRouter()


async def rate_limit_status(request: Request) -> Response:
    """Proxy ``GET /rate_limit`` and humanize its reset times."""
    client = resolve(request, get_github_client)
    now = resolve(request, get_now)
    status = await client.get_rate_limit()
    return Response(content=encode_response(status, now), media_type="application/json")


# A plain Starlette route with methods=None matches any method, custom ones included.
router.add_route("/{path:path}", rate_limit_status, include_in_schema=False)
