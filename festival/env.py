"""Environment helper utilities for scheduler settings."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Optional

ALIAS_KEY_MAP = {
    "host": "FESTIVAL_HOST",
    "port": "FESTIVAL_PORT",
    "webhook": "FESTIVAL_WEBHOOK_URL",
    "webhook url": "FESTIVAL_WEBHOOK_URL",
    "log level": "FESTIVAL_LOG_LEVEL",
    "json logs": "FESTIVAL_JSON_LOGS",
    "ranking size": "FESTIVAL_RANKING_SIZE",
}


def load_env(path: Optional[Path] = None) -> Dict[str, str]:
    """Load environment variables from a .env file, returning a mapping.

    The file is expected to contain KEY=VALUE pairs. Existing os.environ takes
    precedence, but values from the file are also exported for downstream use.
    """

    env_path = Path(path) if path else Path(__file__).resolve().parent.parent / ".env"
    values: Dict[str, str] = {}
    if not env_path.exists():
        return values

    for raw_line in env_path.read_text().splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" in line:
            key, raw_value = line.split("=", 1)
        elif ":" in line:
            key, raw_value = line.split(":", 1)
        else:
            continue
        parsed_key = _normalize_key(key)
        value = raw_value.strip().strip('"').strip("'")
        if parsed_key:
            values[parsed_key] = value
            os.environ.setdefault(parsed_key, value)
    return values


def _normalize_key(key: str) -> Optional[str]:
    lowered = key.lower().strip()
    if not lowered:
        return None
    if lowered in ALIAS_KEY_MAP:
        return ALIAS_KEY_MAP[lowered]
    return lowered.replace(" ", "_").upper()
