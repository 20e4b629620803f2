"""OpenAICompatibleAdapter.

Speaks the ``/chat/completions`` streaming protocol shared by OpenAI and the
many services that copy it (OpenRouter, Groq, DeepSeek, local servers).

Wire format
-----------
- POST ``<base_endpoint>/chat/completions`` with ``Authorization: Bearer``.
- Body ``{"model", "messages": [{"role", "content"}], "stream": true}``.
- Reply is SSE; each data frame is JSON carrying
  ``choices[0].delta.content``. The literal payload ``[DONE]`` ends the
  stream.
"""

from __future__ import annotations

from typing import Any, ClassVar, Dict, Optional

from ..base.constants import SSE_DONE_SENTINEL
from ..base.models import CanonicalChatRequest, ProtocolKind, WireRequest
from ..base.streaming import HttpStreamingAdapter

CHAT_COMPLETIONS_PATH = "/chat/completions"


class OpenAICompatibleAdapter(HttpStreamingAdapter):
    """Adapter for openai-compatible chat completion endpoints."""

    kind: ClassVar[ProtocolKind] = ProtocolKind.OPENAI_COMPATIBLE
    logger_name: ClassVar[str] = "gateway.openai"
    done_sentinel: ClassVar[Optional[str]] = SSE_DONE_SENTINEL

    def auth_headers(self, credential: str) -> Dict[str, str]:
        return {"Authorization": f"Bearer {credential}"}

    def translate_request(self, request: CanonicalChatRequest, credential: str) -> WireRequest:
        headers = self.auth_headers(credential)
        headers["Content-Type"] = "application/json"
        headers["Accept"] = "text/event-stream"
        return WireRequest(
            url=self.descriptor.endpoint(CHAT_COMPLETIONS_PATH),
            json={
                "model": request.model_id,
                "messages": [m.to_wire() for m in request.messages],
                "stream": True,
            },
            headers=headers,
        )

    def extract_text(self, frame: Any) -> Optional[str]:
        choices = frame.get("choices") if isinstance(frame, dict) else None
        if not choices:
            return None
        delta = choices[0].get("delta") or {}
        content = delta.get("content")
        return content if isinstance(content, str) else None


__all__ = ["OpenAICompatibleAdapter", "CHAT_COMPLETIONS_PATH"]
