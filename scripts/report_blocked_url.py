#!/usr/bin/env python
"""
Report Sender — Send blocked URL events to a running listener.

Validates the endpoint with /ping first, the same way the extension does
before it enables reporting.

Usage:
    python scripts/report_blocked_url.py https://ads.example.com/ https://tracker.example.net/
    python scripts/report_blocked_url.py --endpoint http://localhost:9874/ --tab-id 7 https://x.example/
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import argparse
import logging

from listener.exceptions import ReporterError
from listener.reporter import Reporter


# API Configuration
API_BASE_URL = os.environ.get("LISTENER_URL", "http://localhost:3000/")


def main():
    parser = argparse.ArgumentParser(
        description="Send blocked URL events to the URL Blocker Listener"
    )
    parser.add_argument(
        "urls",
        nargs="+",
        help="Blocked URLs to report"
    )
    parser.add_argument(
        "--endpoint", "-e",
        type=str,
        default=API_BASE_URL,
        help=f"Listener endpoint (default: {API_BASE_URL})"
    )
    parser.add_argument(
        "--tab-id",
        type=int,
        default=None,
        help="tabId to attach to each event"
    )
    parser.add_argument(
        "--frame-id",
        type=int,
        default=0,
        help="frameId to attach to each event (default: 0, main frame)"
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    try:
        reporter = Reporter(args.endpoint)
    except ReporterError as e:
        print(f"[ERROR] {e}")
        sys.exit(2)

    if not reporter.validate_endpoint():
        print(f"[ERROR] Server validation failed for {reporter.ping_url}")
        print("       Make sure the listener is running: python -m listener")
        sys.exit(1)

    sent = 0
    for url in args.urls:
        event = reporter.build_event(url, tab_id=args.tab_id, frame_id=args.frame_id)
        if reporter.report(event):
            sent += 1

    print(f"[COMPLETE] Sent {sent} events, {len(args.urls) - sent} failed")
    sys.exit(0 if sent == len(args.urls) else 1)


if __name__ == "__main__":
    main()
