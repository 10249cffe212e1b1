"""Decode the upstream rate-limit payload and re-encode it for display."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

from pydantic import ValidationError

from ghratelimit.api.schemas import RESOURCE_NAMES, RateLimit, RateLimitResponse, Resources
from ghratelimit.exceptions import DecodeError, EncodeError, ParseError
from ghratelimit.services.timestamps import decode_timestamp, encode_timestamp


def _member(obj: Any, key: str, path: str) -> Any:
    if not isinstance(obj, dict):
        raise DecodeError(f"{path or 'payload'} is not an object")
    if key not in obj:
        dotted = f"{path}.{key}" if path else key
        raise DecodeError(f"missing field {dotted!r}")
    return obj[key]


def _validation_detail(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in exc.errors()
    )


def _decode_rate_limit(entry: Any, path: str) -> RateLimit:
    raw_reset = _member(entry, "reset", path)
    # Only a JSON integer is a reset literal; a quoted number is a string.
    if not isinstance(raw_reset, int) or isinstance(raw_reset, bool):
        raise DecodeError(f"{path}.reset: expected an integer, got {raw_reset!r}")
    try:
        reset = decode_timestamp(raw_reset)
    except ParseError as exc:
        raise DecodeError(f"{path}.reset: {exc}") from exc

    try:
        return RateLimit(
            limit=_member(entry, "limit", path),
            remaining=_member(entry, "remaining", path),
            reset=reset,
        )
    except ValidationError as exc:
        raise DecodeError(f"{path}: {_validation_detail(exc)}") from exc


def decode_response(body: bytes | str) -> RateLimitResponse:
    """Decode a ``GET /rate_limit`` body into a :class:`RateLimitResponse`.

    Raises :class:`DecodeError` on malformed JSON, a missing or mistyped
    field, or a reset value that is not an epoch-seconds integer.
    """
    try:
        payload = json.loads(body)
    except ValueError as exc:
        raise DecodeError(exc) from exc

    resources = _member(payload, "resources", "")
    return RateLimitResponse(
        resources=Resources(
            **{
                name: _decode_rate_limit(
                    _member(resources, name, "resources"), f"resources.{name}"
                )
                for name in RESOURCE_NAMES
            }
        ),
        rate=_decode_rate_limit(_member(payload, "rate", ""), "rate"),
    )


def rate_limit_to_dict(rate_limit: RateLimit, now: datetime) -> dict:
    """Display form of one bucket: ``reset`` becomes relative text or ``""``."""
    return {
        "limit": rate_limit.limit,
        "remaining": rate_limit.remaining,
        "reset": encode_timestamp(rate_limit.reset, now),
    }


def encode_response(response: RateLimitResponse, now: datetime) -> bytes:
    """Serialize *response* as 2-space indented JSON, relative to *now*."""
    payload = {
        "resources": {
            name: rate_limit_to_dict(getattr(response.resources, name), now)
            for name in RESOURCE_NAMES
        },
        "rate": rate_limit_to_dict(response.rate, now),
    }
    try:
        return json.dumps(payload, indent=2).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise EncodeError(exc) from exc
