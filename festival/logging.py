"""Structured logging for the festival scheduler, built on structlog.

Every module asks :func:`get_logger` for a logger and emits event-style
messages (``performance_booked``, ``booking_conflict``, ``reminder_sent``,
``broadcast_failed``) with key/value context instead of formatted strings.

One shared processor chain (context vars, level, stack info, timestamps)
feeds either a console renderer, used while developing against the Flask dev
server, or a JSON renderer for log shippers. JSON is chosen when
``FESTIVAL_JSON_LOGS`` is set, when ``--json-logs`` is passed to ``run.py``,
or when ``APP_ENV=production``.

Flask, werkzeug and urllib3 (under ``requests``) log through the standard
library; their records are routed through the same formatter so request
lines, webhook retries and engine events share one shape.
"""
from __future__ import annotations

import logging
import os
import sys
from typing import List, Optional, Tuple

import structlog

from .config import Settings

# urllib3 logs every webhook connection at DEBUG; keep it at WARNING unless
# the scheduler itself runs at DEBUG.
CHATTY_LIBRARIES = ("urllib3",)


def configure_logging(log_level: str = "INFO", json_output: bool = False) -> structlog.BoundLogger:
    """Configure structlog and bridge stdlib logging through it.

    Args:
        log_level: Level name (DEBUG, INFO, WARNING, ERROR). Case-insensitive.
        json_output: Force the JSON renderer. When False, JSON is still used
            if ``APP_ENV`` is ``production``.

    Returns:
        The root structlog logger, for the caller's own start-up messages.
    """

    level = log_level.upper()
    use_json = json_output or os.environ.get("APP_ENV", "development") == "production"

    shared_processors: List[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if use_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        # No colour codes when stdout is piped (systemd, docker logs).
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())

    structlog.configure(
        processors=[*shared_processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *shared_processors,
            renderer,
        ],
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in CHATTY_LIBRARIES:
        logging.getLogger(name).setLevel(level if level == "DEBUG" else "WARNING")

    return structlog.get_logger()


def resolve_options(
    settings: Settings,
    log_level: Optional[str] = None,
    json_output: bool = False,
) -> Tuple[str, bool]:
    """Merge command-line overrides with the environment-derived settings.

    A level given on the command line wins over ``FESTIVAL_LOG_LEVEL``;
    JSON output is on if either source asks for it.
    """

    return (log_level or settings.log_level).upper(), bool(json_output or settings.json_logs)


def configure_from_settings(
    settings: Settings,
    log_level: Optional[str] = None,
    json_output: bool = False,
) -> structlog.BoundLogger:
    """Configure logging for the server process from its settings."""

    level, use_json = resolve_options(settings, log_level, json_output)
    return configure_logging(level, json_output=use_json)


def get_logger(name: str) -> structlog.BoundLogger:
    """Return a structlog logger bound to ``name``.

    Loggers are lazy proxies, so modules may create them at import time;
    they pick up whatever :func:`configure_logging` sets later. Until then
    structlog's defaults apply, which is what the test suite runs with.
    """

    return structlog.get_logger(logger_name=name)
