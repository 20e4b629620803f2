"""Unified timeout configuration for upstream calls.

This module centralizes timeout values used for provider chat streams, model
discovery and sandbox execution. Values are read from the environment once
and cached; the cache is recomputed when the relevant variables change so
tests can adjust them at runtime.

Supported environment variables (all optional, positive floats, seconds):
    GW_TIMEOUT_CONNECT_SECONDS   connection establishment (default 10)
    GW_TIMEOUT_STREAM_SECONDS    idle time between streamed chunks (default 60)
    GW_TIMEOUT_HTTP_SECONDS      baseline for non-streaming requests (default 30)
"""
from __future__ import annotations

import os
from dataclasses import dataclass

import httpx


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        connect_timeout_seconds: Timeout for establishing the upstream connection.
        stream_timeout_seconds: Idle timeout while waiting for the next chunk
            of a streamed response.
        http_timeout_seconds: Timeout for single request/response calls
            (model discovery, sandbox execution).
    """

    connect_timeout_seconds: float = 10.0
    stream_timeout_seconds: float = 60.0
    http_timeout_seconds: float = 30.0

    def stream_timeout(self) -> httpx.Timeout:
        """Return the httpx timeout used for streamed chat calls."""
        return httpx.Timeout(
            self.http_timeout_seconds,
            connect=self.connect_timeout_seconds,
            read=self.stream_timeout_seconds,
        )

    def request_timeout(self) -> httpx.Timeout:
        """Return the httpx timeout used for plain request/response calls."""
        return httpx.Timeout(self.http_timeout_seconds, connect=self.connect_timeout_seconds)


_ENV_NAMES = (
    "GW_TIMEOUT_CONNECT_SECONDS",
    "GW_TIMEOUT_STREAM_SECONDS",
    "GW_TIMEOUT_HTTP_SECONDS",
)

_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float) -> float:
    """Parse an environment variable as a positive float with a fallback default."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached :class:`TimeoutConfig` instance."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(os.getenv(name, "") for name in _ENV_NAMES)
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    _CACHED = TimeoutConfig(
        connect_timeout_seconds=_parse_env_float("GW_TIMEOUT_CONNECT_SECONDS", 10.0),
        stream_timeout_seconds=_parse_env_float("GW_TIMEOUT_STREAM_SECONDS", 60.0),
        http_timeout_seconds=_parse_env_float("GW_TIMEOUT_HTTP_SECONDS", 30.0),
    )
    _ENV_GUARD = guard
    return _CACHED


__all__ = [
    "TimeoutConfig",
    "get_timeout_config",
]
