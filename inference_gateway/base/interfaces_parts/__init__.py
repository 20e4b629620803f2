"""Interfaces (Protocols) split into single-class modules.

``inference_gateway.base.interfaces`` re-exports them as a stable API.
"""

from .protocol_adapter import ProtocolAdapter
from .supports_streaming import SupportsStreaming
from .supports_execution import SupportsExecution

__all__ = [
    "ProtocolAdapter",
    "SupportsStreaming",
    "SupportsExecution",
]
