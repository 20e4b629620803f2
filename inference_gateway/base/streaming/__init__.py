"""Streaming package for the gateway.

Exposes SSE decoding, the live-stream handle, and the shared HTTP streaming
adapter base under a single namespace.
"""

from .sse import LineBuffer, data_payload, iter_sse_data
from .live_stream import LiveStream
from .streaming_adapter import ClientGetter, HttpStreamingAdapter

__all__ = [
    "LineBuffer",
    "data_payload",
    "iter_sse_data",
    "LiveStream",
    "ClientGetter",
    "HttpStreamingAdapter",
]
