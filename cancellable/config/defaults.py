"""cancellable.config.defaults
===========================

Central place for small, stable default values used across the cancellable
package. These defaults can be overridden via environment variables or an
external configuration file, but provide sensible fallbacks for local
development and tests.

This module intentionally avoids importing from other cancellable modules to
prevent circular dependencies. Only plain constants should live here.
"""

from __future__ import annotations

# ---- Errors ----
# Text of a CancelError raised without an explicit message.
DEFAULT_CANCEL_MESSAGE = "task cancelled"

# ---- Logging ----
# Level name applied to the shared ``cancellable`` logger.
DEFAULT_LOG_LEVEL = "INFO"
# Level names accepted from settings; "WARN" is read as "WARNING".
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
# Emit JSON lines (True) or plain ``asctime level name message`` text.
DEFAULT_JSON_LOGS = True
# Emit task.start / task.cancel / task.settle lifecycle events at DEBUG.
DEFAULT_LOG_EVENTS = True
# Base logger name all package loggers hang from.
BASE_LOGGER_NAME = "cancellable"


__all__ = [
    "DEFAULT_CANCEL_MESSAGE",
    "DEFAULT_LOG_LEVEL",
    "LOG_LEVELS",
    "DEFAULT_JSON_LOGS",
    "DEFAULT_LOG_EVENTS",
    "BASE_LOGGER_NAME",
]
