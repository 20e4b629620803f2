"""
Gateway domain models public surface.

This module re-exports the implementations under
``inference_gateway.base.models_parts`` to keep a single stable import path.
"""

from .models_parts.message import ChatMessage, Role, ROLES
from .models_parts.chat_request import CanonicalChatRequest
from .models_parts.provider_descriptor import ProtocolKind, ProviderDescriptor, SandboxLimits
from .models_parts.model_directory_entry import ModelDirectoryEntry
from .models_parts.stream_events import FallbackAttempt, TextDeltaEvent
from .models_parts.wire_request import WireRequest

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
