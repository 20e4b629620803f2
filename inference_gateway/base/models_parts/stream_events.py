"""
Streaming and fallback bookkeeping types.

`TextDeltaEvent` is the single normalized event every streaming adapter
produces. End of stream is signalled by the iterator finishing, not by an
event. `FallbackAttempt` records the outcome of trying one provider.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional


@dataclass(frozen=True)
class TextDeltaEvent:
    """One incremental fragment of generated text."""

    text: str

    def encode(self) -> bytes:
        return self.text.encode("utf-8")


@dataclass(frozen=True)
class FallbackAttempt:
    """Outcome of one provider attempt within a single request."""

    provider_id: str
    outcome: Literal["success", "error"]
    reason: Optional[str] = None


__all__ = ["TextDeltaEvent", "FallbackAttempt"]
