"""Per-request correlation ID carried in a contextvar."""

from __future__ import annotations

import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def generate_request_id() -> str:
    """Return a new 32-character hex request ID."""
    return uuid.uuid4().hex


def get_request_id() -> str:
    return request_id_var.get()


@contextmanager
def bound_request_id(rid: str) -> Iterator[str]:
    """Make *rid* the current request ID for the duration of the block."""
    token = request_id_var.set(rid)
    try:
        yield rid
    finally:
        request_id_var.reset(token)
