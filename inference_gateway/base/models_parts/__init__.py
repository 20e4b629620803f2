"""Gateway domain models split one concern per module.

Import from :mod:`inference_gateway.base.models` for the stable surface.
"""

from .message import ChatMessage, Role, ROLES
from .chat_request import CanonicalChatRequest
from .provider_descriptor import ProtocolKind, ProviderDescriptor, SandboxLimits
from .model_directory_entry import ModelDirectoryEntry
from .stream_events import FallbackAttempt, TextDeltaEvent
from .wire_request import WireRequest

__all__ = [
    "ChatMessage",
    "Role",
    "ROLES",
    "CanonicalChatRequest",
    "ProtocolKind",
    "ProviderDescriptor",
    "SandboxLimits",
    "ModelDirectoryEntry",
    "FallbackAttempt",
    "TextDeltaEvent",
    "WireRequest",
]
