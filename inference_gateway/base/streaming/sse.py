"""Line-buffered server-sent-event decoding.

Upstream bodies arrive as arbitrary byte chunks; a chunk boundary may split
a line (or a multi-byte UTF-8 character) anywhere. :class:`LineBuffer`
accumulates bytes until a full line is available, and
:func:`iter_sse_data` turns complete ``data:`` lines into payload strings.

Each ``data:`` line is treated as one frame. Comment lines (``:``), other
SSE fields (``event:``, ``id:``, ``retry:``) and blank separators are
ignored.
"""
from __future__ import annotations

from typing import AsyncIterable, AsyncIterator, List, Optional

from ..constants import SSE_DATA_PREFIX


class LineBuffer:
    """Accumulate raw bytes and release complete, decoded lines."""

    def __init__(self) -> None:
        self._pending = b""

    def feed(self, chunk: bytes) -> List[str]:
        """Add ``chunk`` and return every line it completed (without EOL)."""
        if not chunk:
            return []
        data = self._pending + chunk
        *complete, self._pending = data.split(b"\n")
        return [_decode(line) for line in complete]

    def flush(self) -> List[str]:
        """Return the trailing partial line, if any, and reset the buffer."""
        rest, self._pending = self._pending, b""
        return [_decode(rest)] if rest.strip() else []

    @property
    def pending(self) -> bytes:
        return self._pending


def _decode(line: bytes) -> str:
    return line.rstrip(b"\r").decode("utf-8", errors="replace")


def data_payload(line: str) -> Optional[str]:
    """Return the payload of a ``data:`` line, or ``None`` for other lines."""
    if not line.startswith(SSE_DATA_PREFIX):
        return None
    payload = line[len(SSE_DATA_PREFIX):]
    if payload.startswith(" "):
        payload = payload[1:]
    return payload


async def iter_sse_data(chunks: AsyncIterable[bytes]) -> AsyncIterator[str]:
    """Yield ``data:`` payloads from a raw byte stream in arrival order."""
    buffer = LineBuffer()
    async for chunk in chunks:
        for line in buffer.feed(chunk):
            payload = data_payload(line)
            if payload is not None:
                yield payload
    for line in buffer.flush():
        payload = data_payload(line)
        if payload is not None:
            yield payload


__all__ = ["LineBuffer", "data_payload", "iter_sse_data"]
