"""Scheduler configuration constants and environment-driven settings."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from . import env
from .errors import ConfigurationError

# Ranking
DEFAULT_RANKING_SIZE: int = 5

# HTTP surface
DEFAULT_HOST: str = "0.0.0.0"
DEFAULT_PORT: int = 8080

# Broadcasting
SNAPSHOT_HISTORY_SIZE: int = 50
WEBHOOK_TIMEOUT_SECONDS: float = 2.0

# Logging
DEFAULT_LOG_LEVEL: str = "INFO"

ENV_PREFIX = "FESTIVAL_"


@dataclass(frozen=True)
class Settings:
    """Runtime settings resolved from the environment."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    webhook_url: Optional[str] = None
    log_level: str = DEFAULT_LOG_LEVEL
    json_logs: bool = False
    ranking_size: int = DEFAULT_RANKING_SIZE


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build :class:`Settings` from ``FESTIVAL_*`` variables.

    When ``environ`` is omitted the optional ``.env`` file is loaded first and
    ``os.environ`` is used.
    """

    if environ is None:
        env.load_env()
        environ = os.environ

    def _get(key: str) -> Optional[str]:
        value = environ.get(ENV_PREFIX + key)
        if value is None or not value.strip():
            return None
        return value.strip()

    return Settings(
        host=_get("HOST") or DEFAULT_HOST,
        port=_int_setting("PORT", _get("PORT"), DEFAULT_PORT),
        webhook_url=_get("WEBHOOK_URL"),
        log_level=(_get("LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
        json_logs=_bool_setting(_get("JSON_LOGS")),
        ranking_size=_int_setting("RANKING_SIZE", _get("RANKING_SIZE"), DEFAULT_RANKING_SIZE),
    )


def _int_setting(name: str, raw: Optional[str], default: int) -> int:
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from None


def _bool_setting(raw: Optional[str]) -> bool:
    if raw is None:
        return False
    return raw.lower() in {"1", "true", "yes", "on"}
