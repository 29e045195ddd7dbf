"""Unified configuration layer for cancellable tasks.

Goals
-----
* Centralize defaults (log level, log format, lifecycle events).
* Merge sources in a predictable order:
    1. Built-in defaults
    2. Optional external config file (JSON or YAML) pointed to by
       CANCELLABLE_CONFIG_FILE
    3. Environment variables (CANCELLABLE_LOG_LEVEL, CANCELLABLE_LOG_JSON,
       CANCELLABLE_LOG_EVENTS)
    4. In-code overrides passed to ``get_settings``
* Provide a single call site: ``get_settings()``.

External Config File (Optional)
-------------------------------
JSON is attempted first, then YAML. Structure example:

```
log_level: DEBUG
json_logs: false
log_events: true
```

Public API
----------
* get_settings(overrides: dict | None = None) -> RunnerSettings
* reset_settings_cache() -> None
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, field_validator

from .defaults import (
    DEFAULT_JSON_LOGS,
    DEFAULT_LOG_EVENTS,
    DEFAULT_LOG_LEVEL,
)
from .env import config_file_path, env_overrides, parse_level


class RunnerSettings(BaseModel):
    """Validated runtime settings.

    Attributes
    ----------
    log_level:
        Level name for the shared ``cancellable`` logger. ``WARN`` is accepted
        as an alias of ``WARNING``.
    json_logs:
        Whether log lines are emitted as JSON objects.
    log_events:
        Whether the runner emits ``task.*`` lifecycle events.
    """

    log_level: str = DEFAULT_LOG_LEVEL
    json_logs: bool = DEFAULT_JSON_LOGS
    log_events: bool = DEFAULT_LOG_EVENTS

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = parse_level(value)
        if level is None:
            raise ValueError(f"unknown log level {value!r}")
        return level


_FILE_CACHE: Optional[Dict[str, Any]] = None
_SETTINGS_CACHE: Optional[RunnerSettings] = None


def _load_external_config() -> Dict[str, Any]:
    global _FILE_CACHE
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = config_file_path()
    if not path or not Path(path).is_file():
        _FILE_CACHE = {}
        return _FILE_CACHE
    text = Path(path).read_text(encoding="utf-8")
    data: Any
    try:
        data = json.loads(text)
    except ValueError:
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError:
            data = {}
    if not isinstance(data, dict):
        data = {}
    _FILE_CACHE = data
    return data


def get_settings(overrides: Optional[Dict[str, Any]] = None) -> RunnerSettings:
    """Return merged settings.

    Merge order (later wins): defaults -> external config -> env vars -> overrides.
    Results without ``overrides`` are cached for the life of the process.
    """
    global _SETTINGS_CACHE
    if overrides is None and _SETTINGS_CACHE is not None:
        return _SETTINGS_CACHE

    cfg: Dict[str, Any] = {}
    file_cfg = _load_external_config()
    cfg |= {k: v for k, v in file_cfg.items() if k in RunnerSettings.model_fields}
    cfg |= env_overrides()
    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}

    settings = RunnerSettings(**cfg)
    if overrides is None:
        _SETTINGS_CACHE = settings
    return settings


def reset_settings_cache() -> None:
    """Forget cached settings and file contents (used by tests)."""
    global _FILE_CACHE, _SETTINGS_CACHE
    _FILE_CACHE = None
    _SETTINGS_CACHE = None


__all__ = [
    "RunnerSettings",
    "get_settings",
    "reset_settings_cache",
]
