"""Base class for HTTP adapters that stream server-sent events.

Concrete adapters (openai-compatible, gemini) only describe their wire
request and where the text sits inside one decoded frame. This base sends
the request with the pooled client, turns non-2xx replies and transport
failures into :class:`UpstreamError`, and normalizes the body into
:class:`TextDeltaEvent` objects.

Frame handling:
    - A payload equal to ``done_sentinel`` ends the stream; it is never
      parsed as JSON.
    - A payload that is not valid JSON is logged as ``stream.frame_skipped``
      and dropped; the remaining frames are still delivered.
    - A well-formed frame without text (role-only deltas, usage frames) is
      dropped silently.
"""
from __future__ import annotations

import json
import logging
from typing import Any, AsyncIterable, AsyncIterator, Callable, ClassVar, Dict, Optional

import httpx

from ..errors import UpstreamError, classify_exception
from ..http import get_httpx_client
from ..logging import LogContext, get_logger, log_event
from ..models import CanonicalChatRequest, ProtocolKind, ProviderDescriptor, TextDeltaEvent, WireRequest
from ..timeouts import get_timeout_config
from .live_stream import LiveStream
from .sse import iter_sse_data

ClientGetter = Callable[[], httpx.AsyncClient]


class HttpStreamingAdapter:
    """Shared open/normalize lifecycle for SSE-speaking providers."""

    kind: ClassVar[ProtocolKind]
    logger_name: ClassVar[str] = "gateway.adapter"
    done_sentinel: ClassVar[Optional[str]] = None

    def __init__(self, descriptor: ProviderDescriptor, *, client_getter: Optional[ClientGetter] = None) -> None:
        self.descriptor = descriptor
        self._client_getter = client_getter or (lambda: get_httpx_client("chat"))
        self._logger = get_logger(self.logger_name)

    @property
    def provider_id(self) -> str:
        return self.descriptor.id

    def supports_streaming(self) -> bool:
        return True

    # ---- protocol specific -------------------------------------------------
    def translate_request(self, request: CanonicalChatRequest, credential: str) -> WireRequest:
        raise NotImplementedError

    def extract_text(self, frame: Any) -> Optional[str]:
        raise NotImplementedError

    def auth_headers(self, credential: str) -> Dict[str, str]:
        return {}

    def auth_params(self, credential: str) -> Dict[str, str]:
        return {}

    def discovery_request(self, credential: str) -> WireRequest:
        """Describe the model-listing call (``GET base + discovery_path``)."""
        return WireRequest(
            url=self.descriptor.endpoint(self.descriptor.discovery_path or ""),
            headers=self.auth_headers(credential),
            params=self.auth_params(credential),
            method="GET",
        )

    # ---- shared lifecycle ----------------------------------------------------
    async def normalize_stream(self, chunks: AsyncIterable[bytes]) -> AsyncIterator[TextDeltaEvent]:
        """Translate a raw SSE byte stream into text deltas, in order."""
        ctx = LogContext(provider=self.provider_id)
        async for payload in iter_sse_data(chunks):
            body = payload.strip()
            if not body:
                continue
            if self.done_sentinel is not None and body == self.done_sentinel:
                return
            try:
                frame = json.loads(body)
            except ValueError as exc:
                log_event(
                    self._logger,
                    "stream.frame_skipped",
                    ctx,
                    level=logging.WARNING,
                    reason="malformed_json",
                    error=str(exc),
                )
                continue
            try:
                text = self.extract_text(frame)
            except (KeyError, IndexError, TypeError, AttributeError) as exc:
                log_event(
                    self._logger,
                    "stream.frame_skipped",
                    ctx,
                    level=logging.WARNING,
                    reason="unexpected_shape",
                    error=repr(exc),
                )
                continue
            if text:
                yield TextDeltaEvent(text=text)

    async def open_stream(
        self,
        request: CanonicalChatRequest,
        credential: str,
        *,
        client: Optional[httpx.AsyncClient] = None,
    ) -> LiveStream:
        """Send the translated request and return a live stream on 2xx.

        Raises:
            UpstreamError: transport failure, timeout, or a non-2xx status.
        """
        wire = self.translate_request(request, credential)
        http = client or self._client_getter()
        outbound = http.build_request(
            wire.method,
            wire.url,
            json=wire.json,
            headers=wire.headers,
            params=wire.params or None,
            timeout=get_timeout_config().stream_timeout(),
        )
        try:
            response = await http.send(outbound, stream=True)
        except httpx.HTTPError as exc:
            raise UpstreamError(
                f"Provider {self.provider_id} failed: {exc.__class__.__name__}: {exc}",
                provider=self.provider_id,
                model=request.model_id,
                code=classify_exception(exc),
                raw=exc,
            ) from exc
        if not response.is_success:
            await response.aclose()
            reason = response.reason_phrase or "error"
            raise UpstreamError(
                f"Provider {self.provider_id} failed: {response.status_code} {reason}",
                provider=self.provider_id,
                model=request.model_id,
                upstream_status=response.status_code,
            )
        return LiveStream(self.provider_id, self.normalize_stream(response.aiter_bytes()), response)


__all__ = ["HttpStreamingAdapter", "ClientGetter"]
