"""
CanonicalChatRequest, the protocol-neutral representation of one chat call.

Adapters translate this shape into their wire format. Instances are built
once per inbound call and never mutated afterwards.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from .message import ChatMessage


@dataclass(frozen=True)
class CanonicalChatRequest:
    """Normalized chat request routed through the fallback orchestrator.

    Attributes:
        messages: Ordered conversation messages.
        provider_id: Id of the provider the caller asked for.
        model_id: Model identifier requested from that provider.
    """

    messages: Tuple[ChatMessage, ...]
    provider_id: str
    model_id: str

    @classmethod
    def build(cls, messages: Iterable[ChatMessage], provider_id: str, model_id: str) -> "CanonicalChatRequest":
        return cls(messages=tuple(messages), provider_id=provider_id, model_id=model_id)

    def last_user_message(self) -> Optional[ChatMessage]:
        """Return the final message authored by the user, if any."""
        for message in reversed(self.messages):
            if message.role == "user":
                return message
        return None


__all__ = ["CanonicalChatRequest"]
