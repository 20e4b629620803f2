"""
Pydantic DTOs for inbound chat calls.

Purpose
-------
Validate the JSON body of ``POST /api/chat`` before it becomes a
``CanonicalChatRequest``. The body is ``{messages, provider, model}``; each
message is ``{role, content, timestamp?}``.

Failure semantics: validation raises ``pydantic.ValidationError``; the
service boundary converts it into ``InvalidRequestError`` (HTTP 400).
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..models import CanonicalChatRequest, ChatMessage, Role


class MessageDTO(BaseModel):
    """One conversation turn as sent by the client."""

    model_config = ConfigDict(extra="ignore")

    role: Role
    content: str
    timestamp: Optional[str] = None

    def to_model(self) -> ChatMessage:
        return ChatMessage(role=self.role, content=self.content, timestamp=self.timestamp or "")


class ChatBodyDTO(BaseModel):
    """Inbound chat body.

    Rules:
        - ``messages`` must be a non-empty list of valid messages.
        - ``provider`` and ``model`` must be non-blank strings.
    """

    model_config = ConfigDict(extra="ignore")

    messages: List[MessageDTO] = Field(min_length=1)
    provider: str
    model: str

    @field_validator("provider", "model")
    @classmethod
    def _non_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    def to_canonical(self) -> CanonicalChatRequest:
        return CanonicalChatRequest.build(
            [m.to_model() for m in self.messages],
            provider_id=self.provider,
            model_id=self.model,
        )


__all__ = ["MessageDTO", "ChatBodyDTO"]
