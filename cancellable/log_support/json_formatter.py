"""JSON formatter for the ``cancellable`` logger.

Each record becomes one JSON object per line. Messages produced by
``log_event`` are JSON themselves; their keys are lifted into the top-level
object, and for task lifecycle events (``task.*``) the raw message is dropped
since every field already appears on the line.
"""
from __future__ import annotations

import contextlib
import json
import logging
from datetime import datetime, timezone

ISO = "%Y-%m-%dT%H:%M:%S.%fZ"

# Attributes every LogRecord carries; anything else was passed via ``extra``.
_RECORD_INTERNALS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {
    "message",
    "asctime",
    "taskName",
}


def _extras(record: logging.LogRecord) -> dict:
    return {
        key: value
        for key, value in vars(record).items()
        if not key.startswith("_") and key not in _RECORD_INTERNALS
    }


class JsonFormatter(logging.Formatter):
    """Render records as single-line JSON objects.

    Output keys: ``ts`` (UTC, ISO-8601), ``level``, ``logger``, ``msg``, the
    hoisted keys of a JSON message, ``extra`` attributes that do not clash
    with those, and ``exc`` when the record carries exception info.
    """

    def format(self, record: logging.LogRecord) -> str:
        text = record.getMessage()
        line = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).strftime(ISO),
            "level": record.levelname,
            "logger": record.name,
            "msg": text,
        }
        with contextlib.suppress(ValueError):
            decoded = json.loads(text)
            if isinstance(decoded, dict):
                line.update(decoded)
                if str(decoded.get("event", "")).startswith("task."):
                    line.pop("msg")
        for key, value in _extras(record).items():
            line.setdefault(key, value)
        if record.exc_info:
            line["exc"] = self.formatException(record.exc_info)
        return json.dumps(line, ensure_ascii=False, default=repr)


__all__ = ["JsonFormatter", "ISO"]
