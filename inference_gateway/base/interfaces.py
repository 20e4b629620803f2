"""
Provider-agnostic interfaces (Protocols) for the adapter layer.

Re-exports the Protocols split into single-class modules under
``inference_gateway.base.interfaces_parts``.
"""

from __future__ import annotations

from .interfaces_parts import ProtocolAdapter, SupportsExecution, SupportsStreaming

__all__ = [
    "ProtocolAdapter",
    "SupportsStreaming",
    "SupportsExecution",
]
