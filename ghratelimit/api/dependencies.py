"""Providers for the upstream client and the clock.

The catch-all route is a plain Starlette route, so providers are looked up
through :func:`resolve`, which still honours ``app.dependency_overrides``.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from typing import TypeVar

from starlette.requests import Request

from ghratelimit.config import settings
from ghratelimit.services.github import GitHubRateLimitClient

T = TypeVar("T")


def get_github_client() -> GitHubRateLimitClient:
    return GitHubRateLimitClient(
        token=settings.github_token,
        url=settings.github_api_url,
        accept=settings.github_accept,
        timeout=settings.upstream_timeout,
    )


def get_now() -> datetime:
    return datetime.now(timezone.utc)


def resolve(request: Request, provider: Callable[[], T]) -> T:
    """Call *provider*, or its override registered on the application."""
    overrides = getattr(request.app, "dependency_overrides", {})
    return overrides.get(provider, provider)()
