"""
Normalized gateway error codes (taxonomy).

Defines the `ErrorCode` enumeration used across adapters, the fallback
orchestrator and the HTTP boundary. Values are lowercase snake_case and are
considered a stable public contract for logging.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    AUTH = "auth"
    UPSTREAM = "upstream"
    TIMEOUT = "timeout"
    UNAVAILABLE = "unavailable"
    CANCELLED = "cancelled"
    CONFIG = "config"
    INTERNAL = "internal"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
