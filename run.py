#!/usr/bin/env python3
"""Run the festival scheduler HTTP API."""
from __future__ import annotations

import argparse
import sys
from typing import Iterable

from festival import config
from festival.api_server import create_app
from festival.broadcast import Broadcaster, FanOutBroadcaster, MemoryBroadcaster, WebhookBroadcaster
from festival.engine import SchedulingEngine
from festival.errors import ConfigurationError
from festival.logging import configure_from_settings


def parse_args(argv: Iterable[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Serve the festival scheduling engine over HTTP.",
    )
    parser.add_argument("--host", help="Interface to bind (default: FESTIVAL_HOST or 0.0.0.0).")
    parser.add_argument("--port", type=int, help="Port to bind (default: FESTIVAL_PORT or 8080).")
    parser.add_argument(
        "--webhook-url",
        help="Also POST every state snapshot to this URL.",
    )
    parser.add_argument("--log-level", help="Logging level (default: FESTIVAL_LOG_LEVEL or INFO).")
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit JSON log lines instead of console output.",
    )
    parser.add_argument("--debug", action="store_true", help="Run Flask in debug mode.")
    return parser.parse_args(list(argv))


def build_broadcaster(webhook_url: str | None) -> Broadcaster:
    memory = MemoryBroadcaster()
    if not webhook_url:
        return memory
    return FanOutBroadcaster(memory, WebhookBroadcaster(webhook_url))


def main(argv: Iterable[str]) -> int:
    args = parse_args(argv)
    try:
        settings = config.load_settings()
    except ConfigurationError as exc:
        print(f"Environment not configured correctly: {exc}", file=sys.stderr)
        return 1

    log = configure_from_settings(settings, log_level=args.log_level, json_output=args.json_logs)

    broadcaster = build_broadcaster(args.webhook_url or settings.webhook_url)
    engine = SchedulingEngine(broadcaster=broadcaster)
    app = create_app(engine=engine, settings=settings)

    host = args.host or settings.host
    port = args.port or settings.port
    log.info("server_starting", host=host, port=port)
    app.run(debug=args.debug, host=host, port=port)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
