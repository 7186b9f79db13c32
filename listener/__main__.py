#!/usr/bin/env python
"""
Listener entry point — serve the report listener with uvicorn.

Usage:
    python -m listener
    python -m listener --host 0.0.0.0 --port 9874 --max-requests 50
    python -m listener --properties /etc/url-blocker/app.properties
"""

import argparse
from typing import List, Optional

import uvicorn

from listener.config import Settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="url-blocker-listener",
        description="Record blocked URL events reported by the URL Blocker extension",
    )
    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Bind interface (default: 127.0.0.1, or 'host' from app.properties)"
    )
    parser.add_argument(
        "--port", "-p",
        type=int,
        default=None,
        help="Listen port (default: 3000, or 'port' from app.properties)"
    )
    parser.add_argument(
        "--max-requests", "-m",
        type=int,
        default=None,
        help="Number of events to retain (default: 10, or 'max_requests' from app.properties)"
    )
    parser.add_argument(
        "--properties",
        type=str,
        default=None,
        help="Path to app.properties"
    )
    return parser


def load_settings(argv: Optional[List[str]] = None) -> Settings:
    """Settings with command-line flags taking precedence over every other source."""
    args = build_parser().parse_args(argv)

    overrides = {
        "HOST": args.host,
        "PORT": args.port,
        "MAX_REQUESTS": args.max_requests,
        "PROPERTIES_FILE": args.properties,
    }
    return Settings(**{k: v for k, v in overrides.items() if v is not None})


def main(argv: Optional[List[str]] = None) -> None:
    config = load_settings(argv)

    # Imported late so the default app is not built before flags are parsed
    from listener.api.main import create_app

    uvicorn.run(
        create_app(config),
        host=config.HOST,
        port=config.PORT,
        log_level=config.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
