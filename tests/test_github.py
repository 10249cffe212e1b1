"""Tests for GitHubRateLimitClient: headers, body handling and error mapping."""

from __future__ import annotations

import json
import logging

import httpx
import pytest

from ghratelimit.api.schemas import RateLimitResponse
from ghratelimit.config import settings
from ghratelimit.exceptions import (
    ClientError,
    DecodeError,
    RequestBuildError,
    TransportError,
)
from ghratelimit.services.github import GitHubRateLimitClient

_URL = "https://api.github.com/rate_limit"

_LIMIT = {"limit": 5000, "remaining": 4999, "reset": 1_700_003_600}
_BODY = {
    "resources": {
        "core": _LIMIT,
        "search": _LIMIT,
        "graphql": _LIMIT,
        "integration_manifest": _LIMIT,
    },
    "rate": _LIMIT,
}


def _client(handler, token: str = "abc123", **kwargs) -> GitHubRateLimitClient:
    return GitHubRateLimitClient(
        token, url=_URL, _transport=httpx.MockTransport(handler), **kwargs
    )


# ---------------------------------------------------------------------------
# Request shape
# ---------------------------------------------------------------------------


class TestRequest:
    async def test_get_with_fixed_headers(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=_BODY)

        await _client(handler).fetch()

        assert len(seen) == 1
        request = seen[0]
        assert request.method == "GET"
        assert str(request.url) == _URL
        assert request.headers["Accept"] == "application/vnd.github.v3+json"
        assert request.headers["Authorization"] == "token abc123"

    async def test_empty_token_is_sent_unvalidated(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.headers["Authorization"] == "token "
            return httpx.Response(200, json=_BODY)

        await _client(handler, token="").fetch()

    async def test_custom_accept_header(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.headers["Accept"] == "application/json"
            return httpx.Response(200, json=_BODY)

        await _client(handler, accept="application/json").fetch()

    def test_defaults_come_from_settings(self):
        client = GitHubRateLimitClient("t")
        assert client.url == settings.github_api_url


# ---------------------------------------------------------------------------
# Success paths
# ---------------------------------------------------------------------------


class TestSuccess:
    async def test_fetch_returns_raw_body(self):
        raw = json.dumps(_BODY).encode()
        body = await _client(lambda req: httpx.Response(200, content=raw)).fetch()
        assert body == raw

    async def test_get_rate_limit_decodes(self):
        result = await _client(lambda req: httpx.Response(200, json=_BODY)).get_rate_limit()
        assert isinstance(result, RateLimitResponse)
        assert result.resources.core.remaining == 4999
        assert int(result.rate.reset.timestamp()) == 1_700_003_600


# ---------------------------------------------------------------------------
# Error paths
# ---------------------------------------------------------------------------


class TestErrors:
    async def test_connect_error_is_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(TransportError) as exc_info:
            await _client(handler).fetch()
        assert str(exc_info.value) == "doing request failed: connection refused"
        assert isinstance(exc_info.value.cause, httpx.ConnectError)

    async def test_timeout_is_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(TransportError):
            await _client(handler, timeout=0.1).fetch()

    async def test_unencodable_token_is_request_build_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("request must not be sent")

        with pytest.raises(RequestBuildError) as exc_info:
            await _client(handler, token="☃").fetch()
        assert str(exc_info.value).startswith("creating request failed: ")

    async def test_invalid_json_is_decode_error(self):
        client = _client(lambda req: httpx.Response(200, content=b"<html>"))
        with pytest.raises(DecodeError) as exc_info:
            await client.get_rate_limit()
        assert "decoding json failed" in str(exc_info.value)

    async def test_all_errors_are_client_errors(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("down", request=request)

        with pytest.raises(ClientError):
            await _client(handler).get_rate_limit()

    async def test_error_status_logged_and_body_returned(self, caplog):
        body = {"message": "Bad credentials"}
        client = _client(lambda req: httpx.Response(401, json=body))

        with caplog.at_level(logging.WARNING, logger="ghratelimit.services.github"):
            raw = await client.fetch()

        assert json.loads(raw) == body
        assert any("401" in r.getMessage() for r in caplog.records)

    async def test_error_status_fails_decoding(self):
        client = _client(lambda req: httpx.Response(401, json={"message": "Bad credentials"}))
        with pytest.raises(DecodeError):
            await client.get_rate_limit()


async def test_error_status_log_carries_upstream_fields(caplog):
    client = _client(lambda req: httpx.Response(403, json={"message": "Forbidden"}))

    with caplog.at_level(logging.WARNING, logger="ghratelimit.services.github"):
        await client.fetch()

    record = next(r for r in caplog.records if r.name == "ghratelimit.services.github")
    assert record.upstream_status == 403
    assert record.upstream_url == _URL
