"""Entry point for ``python -m ghratelimit``."""

from __future__ import annotations

import argparse

import uvicorn

from ghratelimit.config import settings


def main() -> None:
    parser = argparse.ArgumentParser(description="GitHub rate-limit status server")
    parser.add_argument(
        "--host",
        default=settings.host,
        help=f"Bind address (default: {settings.host})",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=settings.port,
        help=f"Port to listen on (default: {settings.port})",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Restart on code changes (development only)",
    )
    args = parser.parse_args()
    uvicorn.run(
        "ghratelimit.api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
