"""Shared helpers for the gateway test suite.

Provides a catalog builder, SSE body encoders, a scripted upstream built on
``httpx.MockTransport`` and a manual clock.
"""

from __future__ import annotations

import asyncio
import json
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

import httpx

from inference_gateway.base.models import CanonicalChatRequest, ChatMessage


def run(coro):
    """Drive a coroutine from a synchronous test."""
    return asyncio.run(coro)


def provider_entry(
    pid: str,
    kind: str = "openai-compatible",
    *,
    credential_ref: Optional[str] = None,
    discovery_path: Optional[str] = "/models",
    default_models: Iterable[str] = (),
    **extra: Any,
) -> Dict[str, Any]:
    """Build one catalog entry pointing at ``https://<pid>.test``."""
    entry: Dict[str, Any] = {
        "id": pid,
        "display_name": pid.title(),
        "protocol_kind": kind,
        "base_endpoint": f"https://{pid}.test/v1",
        "credential_ref": credential_ref or f"{pid.upper()}_KEY",
        "default_models": list(default_models),
    }
    if discovery_path is not None:
        entry["discovery_path"] = discovery_path
    if kind == "sandboxed-exec":
        entry.setdefault("sandbox_limits", {"timeout_ms": 1000, "memory_limit": "64MB"})
    entry.update(extra)
    return entry


def catalog(*entries: Dict[str, Any]) -> Dict[str, Any]:
    return {"providers": list(entries)}


def chat_request(
    provider: str = "alpha",
    model: str = "m-1",
    messages: Optional[List[Tuple[str, str]]] = None,
) -> CanonicalChatRequest:
    pairs = messages or [("user", "hi")]
    return CanonicalChatRequest.build([ChatMessage(role=r, content=c) for r, c in pairs], provider, model)


def openai_sse(*texts: str, done: bool = True) -> bytes:
    """Encode ``texts`` as an openai-compatible SSE body."""
    lines = [f"data: {json.dumps({'choices': [{'delta': {'content': t}}]})}\n\n" for t in texts]
    if done:
        lines.append("data: [DONE]\n\n")
    return "".join(lines).encode("utf-8")


def gemini_sse(*texts: str) -> bytes:
    frames = [{"candidates": [{"content": {"role": "model", "parts": [{"text": t}]}}]} for t in texts]
    return "".join(f"data: {json.dumps(f)}\r\n\r\n" for f in frames).encode("utf-8")


def models_body(*ids: str) -> Dict[str, Any]:
    return {"object": "list", "data": [{"id": i, "object": "model"} for i in ids]}


async def agen(chunks: Iterable[bytes]):
    for c in chunks:
        yield c


class TrackingStream(httpx.AsyncByteStream):
    """Async byte stream that records whether it was closed."""

    def __init__(self, chunks: Iterable[bytes]) -> None:
        self._chunks = list(chunks)
        self.closed = False
        self.served = 0

    async def __aiter__(self):
        for c in self._chunks:
            self.served += 1
            yield c

    async def aclose(self) -> None:
        self.closed = True


Handler = Callable[[httpx.Request], httpx.Response]


class ScriptedUpstream:
    """Route requests by host to per-provider handlers and record them.

    ``routes`` maps a host (``alpha.test``) to a handler returning an
    ``httpx.Response``. Unrouted hosts raise ``httpx.ConnectError``.
    """

    def __init__(self, routes: Optional[Dict[str, Handler]] = None) -> None:
        self.routes: Dict[str, Handler] = dict(routes or {})
        self.calls: List[httpx.Request] = []

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        handler = self.routes.get(request.url.host)
        if handler is None:
            raise httpx.ConnectError("connection refused", request=request)
        return handler(request)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self._handle))

    def hits(self, host: str, path_suffix: str = "") -> int:
        return sum(1 for r in self.calls if r.url.host == host and r.url.path.endswith(path_suffix))


def chat_and_models(
    chat: Callable[[httpx.Request], httpx.Response],
    models: Iterable[str] = (),
    models_status: int = 200,
) -> Handler:
    """Handler answering ``GET /models`` with ``models`` and anything else with ``chat``."""
    model_ids = tuple(models)

    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "GET" and request.url.path.endswith("/models"):
            if models_status != 200:
                return httpx.Response(models_status, json={"error": "nope"})
            return httpx.Response(200, json=models_body(*model_ids))
        return chat(request)

    return handler


def stream_ok(*texts: str) -> Callable[[httpx.Request], httpx.Response]:
    return lambda request: httpx.Response(
        200, content=openai_sse(*texts), headers={"content-type": "text/event-stream"}
    )


def status(code: int) -> Callable[[httpx.Request], httpx.Response]:
    return lambda request: httpx.Response(code, text="upstream says no")


class ManualClock:
    """Deterministic UTC clock for TTL tests."""

    def __init__(self, start: Optional[datetime] = None) -> None:
        self.now = start or datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **delta: float) -> None:
        self.now += timedelta(**delta)
