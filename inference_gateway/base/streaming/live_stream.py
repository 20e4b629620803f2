"""Handle for an upstream stream that has been opened successfully.

The orchestrator hands a :class:`LiveStream` to the service boundary once a
provider answered 2xx. Iterating it yields normalized
:class:`TextDeltaEvent` objects; closing it (explicitly, or by abandoning
iteration) closes the upstream connection instead of draining it.
"""
from __future__ import annotations

from typing import AsyncIterator, Optional

import anyio
import httpx

from ..models import TextDeltaEvent


class LiveStream:
    """Single-use async iterator over one provider's text deltas."""

    def __init__(
        self,
        provider_id: str,
        events: AsyncIterator[TextDeltaEvent],
        response: Optional[httpx.Response] = None,
    ) -> None:
        self.provider_id = provider_id
        self._events = events
        self._response = response
        self._closed = False
        self.emitted = 0

    def __aiter__(self) -> AsyncIterator[TextDeltaEvent]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[TextDeltaEvent]:
        try:
            async for event in self._events:
                self.emitted += 1
                yield event
        finally:
            await self.aclose()

    @property
    def closed(self) -> bool:
        return self._closed

    async def aclose(self) -> None:
        """Close the event iterator and the upstream response. Idempotent."""
        if self._closed:
            return
        self._closed = True
        # Shielded so a cancelled request still releases the upstream connection.
        with anyio.CancelScope(shield=True):
            aclose = getattr(self._events, "aclose", None)
            if aclose is not None:
                await aclose()
            if self._response is not None:
                await self._response.aclose()


__all__ = ["LiveStream"]
