"""Exception hierarchy for the rate-limit status proxy."""

from __future__ import annotations


class RateLimitStatusError(Exception):
    """Base exception for every failure that aborts a request.

    ``str(exc)`` renders as ``"<stage> failed: <cause>"``, which is also the
    plain-text body returned to the caller.
    """

    stage = "handling request"

    def __init__(self, cause: object) -> None:
        self.cause = cause
        super().__init__(f"{self.stage} failed: {cause}")


class ClientError(RateLimitStatusError):
    """Raised by the upstream client when no usable payload was obtained."""


class RequestBuildError(ClientError):
    """The outbound request could not be constructed."""

    stage = "creating request"


class TransportError(ClientError):
    """The outbound request failed in transit (connect, timeout, protocol)."""

    stage = "doing request"


class DecodeError(ClientError):
    """The upstream body is not a well-formed rate-limit payload."""

    stage = "decoding json"


class EncodeError(RateLimitStatusError):
    """The response could not be serialized."""

    stage = "encoding json"


class ParseError(ValueError):
    """Raised when a timestamp literal is not a base-10 64-bit integer."""
