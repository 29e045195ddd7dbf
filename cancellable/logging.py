"""Structured logging for the task runner.

Every logger in the package is a child of the shared ``cancellable`` logger,
which owns a single console handler writing to ``sys.stderr``. The base level
comes from ``CANCELLABLE_LOG_LEVEL`` when set (re-read on each ``get_logger``
call) and otherwise from :func:`cancellable.config.get_settings`.

``log_event`` writes one JSON object per event. ``normalized_log_event`` is
the variant used for task lifecycle events: it always carries ``structured``,
``phase``, ``status`` and ``cancelled``, plus ``error_code`` when the task
failed.
"""
from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional

from .config import get_settings
from .config.defaults import BASE_LOGGER_NAME
from .config.env import ENV_MAP
from .log_support import JsonFormatter, LogContext

_READY_ATTR = "_cancellable_logger_initialized"
_CONSOLE_ATTR = "_cancellable_console_handler"
_FILE_ATTR = "_cancellable_file_handler"
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

# 10 MiB per file, five rotations.
_ROTATE_BYTES = 10 * 1024 * 1024
_ROTATE_COUNT = 5


def _formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT)


def _resolve_level(value: int | str | None, fallback: int = logging.INFO) -> int:
    """Turn a level name or number into a logging constant.

    Names are matched case-insensitively and ``WARN`` is accepted. Unknown
    names and empty values yield ``fallback``.
    """
    if isinstance(value, int):
        return value
    if not value:
        return fallback
    name = value.strip().upper()
    if name == "WARN":
        name = "WARNING"
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else fallback


def _close_quietly(handler: logging.Handler) -> None:
    with contextlib.suppress(Exception):
        handler.close()


def _new_console_handler(json_mode: bool, level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(_formatter(json_mode))
    setattr(handler, _CONSOLE_ATTR, True)
    return handler


def _refresh_console(logger: logging.Logger, json_mode: bool, level: int) -> None:
    """Bring the console handler in line with the current stderr, mode and level.

    A handler whose stream was closed (for example a finished pytest capture)
    is replaced rather than reused.
    """
    for handler in [h for h in logger.handlers if getattr(h, _CONSOLE_ATTR, False)]:
        stream = getattr(handler, "stream", None)
        if stream is None or getattr(stream, "closed", False):
            logger.removeHandler(handler)
            _close_quietly(handler)
            logger.addHandler(_new_console_handler(json_mode, level))
            continue
        handler.setLevel(level)
        if stream is not sys.stderr and isinstance(handler, logging.StreamHandler):
            handler.setStream(sys.stderr)
        if isinstance(handler.formatter, JsonFormatter) != json_mode:
            handler.setFormatter(_formatter(json_mode))


def _base_logger(json_mode: bool, level: int) -> logging.Logger:
    """Return the shared ``cancellable`` logger, setting it up on first use."""
    base = logging.getLogger(BASE_LOGGER_NAME)
    level = _resolve_level(os.getenv(ENV_MAP["log_level"]), fallback=level)
    base.setLevel(level)
    if getattr(base, _READY_ATTR, False):
        _refresh_console(base, json_mode, level)
        return base
    base.handlers[:] = [_new_console_handler(json_mode, level)]
    base.propagate = False
    setattr(base, _READY_ATTR, True)
    return base


def get_logger(
    name: str = BASE_LOGGER_NAME,
    json_mode: Optional[bool] = None,
    level: Optional[int] = None,
) -> logging.Logger:
    """Return ``name`` as a logger routed through the shared console handler.

    ``json_mode`` and ``level`` fall back to ``get_settings()``. Loggers other
    than the base one get no handlers of their own and propagate to it.
    """
    settings = get_settings()
    base = _base_logger(
        json_mode=settings.json_logs if json_mode is None else json_mode,
        level=_resolve_level(settings.log_level) if level is None else level,
    )
    if name == BASE_LOGGER_NAME:
        return base

    child = logging.getLogger(name)
    for handler in [h for h in child.handlers if getattr(h, _CONSOLE_ATTR, False)]:
        child.removeHandler(handler)
        _close_quietly(handler)
    child.setLevel(logging.NOTSET)
    child.propagate = True
    return child


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
    logger_name: str = BASE_LOGGER_NAME,
) -> logging.Logger:
    """Adjust a package logger at runtime.

    Parameters
    ----------
    level: int | str | None
        New level (number or name). ``None`` keeps the current one. Every
        handler on the logger follows it.
    file_path: Optional[str]
        Path of a rotating log file to write to. An existing file handler for
        the same path is reused; one for another path is replaced. ``None``
        detaches any file handler this function added earlier.
    json_mode: bool
        Whether the file handler writes JSON or plain lines.
    logger_name: str
        Logger to adjust; the shared ``cancellable`` logger by default.

    Returns
    -------
    logging.Logger
        The adjusted logger.

    Notes
    -----
    Only handlers attached by this module are touched.
    """
    if getattr(logging.getLogger(BASE_LOGGER_NAME), _READY_ATTR, False):
        logger = logging.getLogger(logger_name)
    else:
        logger = get_logger(logger_name, json_mode=json_mode)

    if level is not None:
        logger.setLevel(_resolve_level(level, fallback=logger.level))
        for handler in logger.handlers:
            handler.setLevel(logger.level)

    file_handlers = [h for h in logger.handlers if getattr(h, _FILE_ATTR, False)]
    target = os.path.abspath(os.path.expanduser(file_path)) if file_path is not None else None
    kept: Optional[logging.Handler] = None
    for handler in file_handlers:
        if target is not None and getattr(handler, "baseFilename", None) == target:
            kept = handler
            continue
        logger.removeHandler(handler)
        _close_quietly(handler)
    if target is None:
        return logger

    if kept is None:
        os.makedirs(os.path.dirname(target), exist_ok=True)
        kept = RotatingFileHandler(target, maxBytes=_ROTATE_BYTES, backupCount=_ROTATE_COUNT, encoding="utf-8")
        setattr(kept, _FILE_ATTR, True)
        logger.addHandler(kept)
    kept.setLevel(logger.level)
    kept.setFormatter(_formatter(json_mode))
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Log ``{"event": event, **ctx, **fields}`` as one JSON string.

    Nothing is serialized when ``level`` is disabled on ``logger``. Fields set
    to ``None`` are left out unless ``keep_none`` is true.
    """
    if not logger.isEnabledFor(level):
        return
    payload: Dict[str, Any] = {"event": event}
    if ctx:
        payload.update(ctx.to_dict())
    payload.update(fields if keep_none else {k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=repr))


REQUIRED_NORMALIZED_KEYS = ("structured", "phase", "status", "cancelled")


def normalized_log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    phase: str,
    status: str,
    cancelled: bool,
    error_code: str | None = None,
    level: int = logging.DEBUG,
    structured: bool = True,
    **extra_fields: Any,
) -> None:
    """Log a task lifecycle event carrying :data:`REQUIRED_NORMALIZED_KEYS`.

    ``error_code`` appears only for failures. ``None`` extras are dropped and
    extras never override the required keys.
    """
    fields: Dict[str, Any] = {k: v for k, v in extra_fields.items() if v is not None}
    fields.update(structured=structured, phase=phase, status=status, cancelled=cancelled)
    if error_code is not None:
        fields["error_code"] = error_code
    log_event(logger, event, ctx, level=level, keep_none=True, **fields)


__all__ = [
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
    "normalized_log_event",
    "REQUIRED_NORMALIZED_KEYS",
]
