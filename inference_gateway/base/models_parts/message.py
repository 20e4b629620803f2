"""
Chat message DTO shared by the gateway core.

Defines the immutable `ChatMessage` dataclass and the `Role` literal. A
conversation is an append-only, ordered sequence of these messages.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Role = Literal["user", "assistant", "system"]

ROLES: tuple[str, ...] = ("user", "assistant", "system")


@dataclass(frozen=True)
class ChatMessage:
    """A single chat message.

    Attributes:
        role: Author role (``"user"``, ``"assistant"`` or ``"system"``).
        content: Plain text content.
        timestamp: Client-supplied timestamp string; carried through verbatim
            and never sent upstream.
    """

    role: Role
    content: str
    timestamp: str = ""

    def to_wire(self) -> dict[str, str]:
        """Return the ``{role, content}`` shape shared by chat wire formats."""
        return {"role": self.role, "content": self.content}


__all__ = ["ChatMessage", "Role", "ROLES"]
