"""SupportsStreaming Protocol (single-class module).

Capability marker for adapters that relay incremental text deltas.
"""

from __future__ import annotations

from typing import AsyncIterable, AsyncIterator, Protocol, runtime_checkable

from ..models import CanonicalChatRequest, TextDeltaEvent, WireRequest
from ..streaming import LiveStream


@runtime_checkable
class SupportsStreaming(Protocol):
    """Capability marker for adapters that can stream incremental deltas.

    ``open_stream`` returns only once the upstream answered 2xx; any earlier
    failure is raised as ``UpstreamError`` so the caller may fall back.
    """

    def supports_streaming(self) -> bool:  # pragma: no cover - trivial
        """Return True if the adapter streams chat responses."""
        return True

    async def open_stream(self, request: CanonicalChatRequest, credential: str) -> LiveStream:  # pragma: no cover - interface
        """Open the upstream stream for ``request``."""
        ...

    def normalize_stream(self, chunks: AsyncIterable[bytes]) -> AsyncIterator[TextDeltaEvent]:  # pragma: no cover - interface
        """Translate raw upstream bytes into text deltas."""
        ...

    def discovery_request(self, credential: str) -> WireRequest:  # pragma: no cover - interface
        """Describe the model-listing call for this provider."""
        ...
