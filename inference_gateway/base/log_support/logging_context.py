"""Structured logging context object for gateway events.

:class:`LogContext` carries the fields shared by every event emitted while a
request is handled (provider id, model id, request id, free-form extras).
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Structured context for gateway logging events."""

    provider: Optional[str] = None
    model: Optional[str] = None
    request_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        extra = data.pop("extra", {}) or {}
        data.update({k: v for k, v in extra.items() if v is not None})
        return {k: v for k, v in data.items() if v is not None}

    def for_provider(self, provider: str) -> "LogContext":
        """Return a copy of this context re-targeted at another provider."""
        return replace(self, provider=provider, extra=dict(self.extra))


__all__ = ["LogContext"]
