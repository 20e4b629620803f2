"""GeminiAdapter.

Wire format
-----------
- POST ``<base_endpoint>/models/<model>:streamGenerateContent`` with query
  parameters ``alt=sse`` and ``key=<credential>``. The credential travels in
  the URL, not in a header, so URLs built here are never logged.
- ``system`` messages are dropped; ``assistant`` becomes ``model`` and every
  other role becomes ``user``. Each message is wrapped as
  ``{"role", "parts": [{"text"}]}`` under ``contents``.
- Each SSE data frame is a JSON ``GenerateContentResponse``; text sits at
  ``candidates[0].content.parts[0].text``. The stream ends when the upstream
  closes it; there is no sentinel frame.
"""

from __future__ import annotations

from typing import Any, ClassVar, Dict, Iterable, List, Optional
from urllib.parse import quote

from ..base.models import CanonicalChatRequest, ChatMessage, ProtocolKind, WireRequest
from ..base.streaming import HttpStreamingAdapter

_ROLE_MAP = {"assistant": "model"}


def to_gemini_contents(messages: Iterable[ChatMessage]) -> List[Dict[str, Any]]:
    """Translate canonical messages into Gemini ``contents``."""
    return [
        {"role": _ROLE_MAP.get(m.role, "user"), "parts": [{"text": m.content}]}
        for m in messages
        if m.role != "system"
    ]


class GeminiAdapter(HttpStreamingAdapter):
    """Adapter for the Gemini ``streamGenerateContent`` endpoint."""

    kind: ClassVar[ProtocolKind] = ProtocolKind.GEMINI
    logger_name: ClassVar[str] = "gateway.gemini"

    def auth_params(self, credential: str) -> Dict[str, str]:
        return {"key": credential}

    def translate_request(self, request: CanonicalChatRequest, credential: str) -> WireRequest:
        params = {"alt": "sse"}
        params.update(self.auth_params(credential))
        return WireRequest(
            # model ids come from callers; keep them inside one path segment
            url=self.descriptor.endpoint(f"/models/{quote(request.model_id, safe='')}:streamGenerateContent"),
            json={"contents": to_gemini_contents(request.messages)},
            headers={"Content-Type": "application/json"},
            params=params,
        )

    def extract_text(self, frame: Any) -> Optional[str]:
        candidates = frame.get("candidates") if isinstance(frame, dict) else None
        if not candidates:
            return None
        parts = (candidates[0].get("content") or {}).get("parts") or []
        if not parts:
            return None
        text = parts[0].get("text")
        return text if isinstance(text, str) else None


__all__ = ["GeminiAdapter", "to_gemini_contents"]
