"""Wire and display transformations for rate-limit reset timestamps.

On the wire a reset time is an integer count of Unix seconds.  For display
it becomes a lower-cased relative time ("about an hour"), or an empty string
once the instant is no longer in the future.  Nothing is ever encoded back
to epoch seconds.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

from ghratelimit.exceptions import ParseError
from ghratelimit.services.humanize import human_duration

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

# Optional sign followed by ASCII digits only; no whitespace or underscores.
_INTEGER_LITERAL = re.compile(r"[+-]?[0-9]+")


def _parse_int64(raw: bytes | str | int) -> int:
    if isinstance(raw, bool):
        raise ParseError(f"invalid timestamp {raw!r}: not an integer")
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, (bytes, str)):
        text = raw.decode("ascii", errors="replace") if isinstance(raw, bytes) else raw
        if not _INTEGER_LITERAL.fullmatch(text):
            raise ParseError(f"invalid timestamp {text!r}: not a base-10 integer")
        value = int(text, 10)
    else:
        raise ParseError(f"invalid timestamp {raw!r}: not an integer")

    if not INT64_MIN <= value <= INT64_MAX:
        raise ParseError(f"invalid timestamp {value}: out of 64-bit range")
    return value


def decode_timestamp(raw: bytes | str | int) -> datetime:
    """Decode an epoch-seconds literal into an aware UTC ``datetime``.

    *raw* is either the literal text of a JSON integer (``b"1700000000"``)
    or the already-parsed ``int``.  Raises :class:`ParseError` otherwise.
    """
    seconds = _parse_int64(raw)
    try:
        return EPOCH + timedelta(seconds=seconds)
    except OverflowError as exc:
        raise ParseError(f"invalid timestamp {seconds}: out of range") from exc


def encode_timestamp(instant: datetime, now: datetime) -> str:
    """Render *instant* relative to *now*; ``""`` when it is not in the future."""
    delta = instant - now
    if delta <= timedelta(0):
        return ""
    return human_duration(delta).lower()
