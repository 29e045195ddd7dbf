"""cancellable.config.env
======================

Centralized environment variable names and parsing helpers.

Failure Modes
-------------
- Helpers never raise on unset or malformed variables; they return ``None``
  (or the supplied default) and let the caller fall back to lower-precedence
  sources.
"""

from __future__ import annotations

import os
from typing import Dict, Optional

from .defaults import LOG_LEVELS

# Settings field -> environment variable
ENV_MAP: Dict[str, str] = {
    "log_level": "CANCELLABLE_LOG_LEVEL",
    "json_logs": "CANCELLABLE_LOG_JSON",
    "log_events": "CANCELLABLE_LOG_EVENTS",
}

# Optional JSON/YAML settings file
CONFIG_FILE_ENV = "CANCELLABLE_CONFIG_FILE"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def parse_bool(value: Optional[str], default: Optional[bool] = None) -> Optional[bool]:
    """Parse common truthy/falsy spellings; unknown values yield ``default``."""
    if value is None:
        return default
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    return default


def parse_level(value: Optional[str]) -> Optional[str]:
    """Return the canonical level name for ``value``, or ``None`` if unknown."""
    if value is None:
        return None
    name = value.strip().upper()
    if name == "WARN":
        name = "WARNING"
    return name if name in LOG_LEVELS else None


def env_overrides() -> Dict[str, object]:
    """Return settings fields present in the environment, already typed.

    Unknown level names and unparseable booleans are left out.
    """
    out: Dict[str, object] = {}
    level = parse_level(os.getenv(ENV_MAP["log_level"]))
    if level is not None:
        out["log_level"] = level
    for field in ("json_logs", "log_events"):
        parsed = parse_bool(os.getenv(ENV_MAP[field]))
        if parsed is not None:
            out[field] = parsed
    return out


def config_file_path() -> Optional[str]:
    path = os.getenv(CONFIG_FILE_ENV)
    return path.strip() if path and path.strip() else None


__all__ = [
    "ENV_MAP",
    "CONFIG_FILE_ENV",
    "parse_bool",
    "parse_level",
    "env_overrides",
    "config_file_path",
]
