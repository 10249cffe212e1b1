from __future__ import annotations

import logging
from typing import Any

import httpx

from ghratelimit.api.schemas import RateLimitResponse
from ghratelimit.config import settings
from ghratelimit.exceptions import RequestBuildError, TransportError
from ghratelimit.services.rate_limit_serializer import decode_response

logger = logging.getLogger(__name__)


class GitHubRateLimitClient:
    """Fetches the GitHub rate-limit status with a fixed credential.

    The token is supplied at construction; an empty token is sent as-is and
    left for GitHub to reject.
    """

    def __init__(
        self,
        token: str,
        url: str | None = None,
        accept: str | None = None,
        timeout: float | None = None,
        *,
        _transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._token = token
        self._url = url if url is not None else settings.github_api_url
        self._accept = accept if accept is not None else settings.github_accept
        self._timeout = timeout if timeout is not None else settings.upstream_timeout
        self._transport = _transport

    @property
    def url(self) -> str:
        return self._url

    def _headers(self) -> dict[str, str]:
        return {
            "Accept": self._accept,
            "Authorization": f"token {self._token}",
        }

    def _build_request(self, client: httpx.AsyncClient) -> httpx.Request:
        try:
            return client.build_request("GET", self._url, headers=self._headers())
        except (httpx.InvalidURL, ValueError) as exc:
            raise RequestBuildError(exc) from exc

    async def fetch(self) -> bytes:
        """Perform the GET and return the fully-read response body."""
        kwargs: dict[str, Any] = {"timeout": self._timeout}
        if self._transport is not None:
            kwargs["transport"] = self._transport

        async with httpx.AsyncClient(**kwargs) as client:
            request = self._build_request(client)
            try:
                resp = await client.send(request)
            except httpx.HTTPError as exc:
                raise TransportError(exc) from exc

        upstream = {"upstream_url": self._url, "upstream_status": resp.status_code}
        logger.debug("GET %s -> %s", self._url, resp.status_code, extra=upstream)
        if resp.is_error:
            logger.warning(
                "GitHub rate-limit endpoint returned %s",
                resp.status_code,
                extra=upstream,
            )
        return resp.content

    async def get_rate_limit(self) -> RateLimitResponse:
        """Fetch and decode the rate-limit status."""
        body = await self.fetch()
        result = decode_response(body)
        logger.debug("rate limit status: %r", result)
        return result
