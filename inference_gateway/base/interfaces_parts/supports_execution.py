"""SupportsExecution Protocol (single-class module)."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..models import CanonicalChatRequest


@runtime_checkable
class SupportsExecution(Protocol):
    """Capability marker for adapters that run code instead of streaming.

    ``execute`` returns the runtime's textual result in one piece.
    """

    async def execute(self, request: CanonicalChatRequest, credential: str) -> str:  # pragma: no cover - interface
        ...
