"""
Wire-level request produced by protocol adapters.

Keeps adapters free of transport concerns: an adapter only describes the
call; the shared streaming base sends it with the pooled httpx client.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class WireRequest:
    """An upstream HTTP call described as data.

    Attributes:
        url: Absolute endpoint URL (without query parameters).
        json: JSON-serializable request body (``None`` for GET calls).
        headers: Request headers (may carry the bearer credential).
        params: Query parameters (may carry the credential for protocols
            that pass it in the URL).
        method: HTTP method.
    """

    url: str
    json: Optional[Dict[str, Any]] = None
    headers: Dict[str, str] = field(default_factory=dict)
    params: Dict[str, str] = field(default_factory=dict)
    method: str = "POST"


__all__ = ["WireRequest"]
