"""Access logging and request correlation middleware (pure ASGI)."""

from __future__ import annotations

import logging
import time

from starlette.requests import Request
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from ghratelimit.services.request_context import bound_request_id, generate_request_id

logger = logging.getLogger("ghratelimit.access")


def _incoming_request_id(scope: Scope) -> str:
    for name, value in scope.get("headers", []):
        if name == b"x-request-id":
            return value.decode("latin-1")
    return ""


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


def correlation_headers(request: Request) -> dict[str, str]:
    """``X-Request-ID`` / ``X-Response-Time-Ms`` for a response built outside
    the middleware (the catch-all 500 is rendered by ServerErrorMiddleware,
    which wraps this one).  Empty when the middleware never saw the request.
    """
    rid = getattr(request.state, "request_id", None)
    start = getattr(request.state, "request_start", None)
    if rid is None or start is None:
        return {}
    return {"X-Request-ID": rid, "X-Response-Time-Ms": str(_elapsed_ms(start))}


class RequestLoggingMiddleware:
    """Log one access line per request and tag the response.

    Every response gets ``X-Request-ID`` (echoed from the request when the
    caller supplied one) and ``X-Response-Time-Ms``.  Both values are also
    kept in the request state for :func:`correlation_headers`.  The access
    line carries ``method``, ``path``, ``status_code`` and ``latency_ms`` as
    extra fields so the JSON formatter emits them as keys.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        rid = _incoming_request_id(scope) or generate_request_id()
        with bound_request_id(rid):
            await self._handle(scope, receive, send, rid)

    async def _handle(self, scope: Scope, receive: Receive, send: Send, rid: str) -> None:
        start = time.perf_counter()
        state = scope.setdefault("state", {})
        state["request_id"] = rid
        state["request_start"] = start
        status_code = 500

        async def send_wrapper(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
                headers = list(message.get("headers", []))
                headers.append((b"x-response-time-ms", str(_elapsed_ms(start)).encode()))
                headers.append((b"x-request-id", rid.encode("latin-1")))
                message = {**message, "headers": headers}
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            elapsed_ms = _elapsed_ms(start)
            method = scope.get("method", "")
            path = scope.get("path", "")
            logger.info(
                "%s %s %s %.2fms",
                method,
                path,
                status_code,
                elapsed_ms,
                extra={
                    "method": method,
                    "path": path,
                    "status_code": status_code,
                    "latency_ms": elapsed_ms,
                },
            )
