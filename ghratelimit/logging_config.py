"""Logging setup: text or single-line JSON on stderr, tagged with the request ID."""

from __future__ import annotations

import json
import logging
import sys
import traceback
from datetime import datetime, timezone

from ghratelimit.services.request_context import get_request_id

# Attributes every LogRecord carries; anything else was passed via ``extra=``.
_STANDARD_RECORD_ATTRS: frozenset[str] = frozenset(
    vars(logging.makeLogRecord({}))
) | {"message", "asctime"}

# Third-party loggers that are chatty at INFO (one line per outbound request).
_NOISY_LOGGERS = ("httpx", "httpcore")

# Extras this service attaches to its records, rendered as key=value in text mode.
_CONTEXT_FIELDS = ("stage", "upstream_status", "status_code", "latency_ms")


def _extra_fields(record: logging.LogRecord) -> dict:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _STANDARD_RECORD_ATTRS and not key.startswith("_")
    }


def _format_exc(record: logging.LogRecord) -> str:
    return "".join(traceback.format_exception(*record.exc_info))


class JSONFormatter(logging.Formatter):
    """One JSON object per line, for log aggregators."""

    def format(self, record: logging.LogRecord) -> str:
        record.message = record.getMessage()
        entry: dict = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.message,
        }

        request_id = get_request_id()
        if request_id:
            entry["request_id"] = request_id

        entry.update(_extra_fields(record))

        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = _format_exc(record)

        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """``<ts> <LEVEL> [<rid>] <logger> - <message> (<key=value ...>)`` for terminals."""

    def format(self, record: logging.LogRecord) -> str:
        record.message = record.getMessage()
        ts = datetime.fromtimestamp(
            record.created, tz=timezone.utc
        ).strftime("%Y-%m-%d %H:%M:%S")

        request_id = get_request_id()
        rid_prefix = f"[{request_id[:12]}] " if request_id else ""

        line = f"{ts} {record.levelname:<8} {rid_prefix}{record.name} - {record.message}"
        context = " ".join(
            f"{key}={getattr(record, key)}"
            for key in _CONTEXT_FIELDS
            if hasattr(record, key)
        )
        if context:
            line += f" ({context})"

        if record.exc_info and record.exc_info[0] is not None:
            line += "\n" + _format_exc(record)

        return line


def setup_logging(log_level: str = "INFO", log_format: str = "text") -> None:
    """Configure the root logger. Call once at startup."""
    level = getattr(logging, log_level.upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(level)

    # Drop handlers left over from a previous call (uvicorn --reload).
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    if log_format.lower() == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(TextFormatter())
    root.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
