"""
Normalized task outcome error codes (taxonomy).

Defines the `ErrorCode` enumeration used to tag settlement events. Values are
lowercase snake_case and are considered a stable public contract for logging.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    CANCELLED = "cancelled"
    TIMEOUT = "timeout"
    INVALID = "invalid"
    FAILED = "failed"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
