"""openai-compatible adapter: request translation and stream normalization."""

from __future__ import annotations

import httpx
import pytest

from inference_gateway.base.errors import ErrorCode, UpstreamError
from inference_gateway.base.models import ProtocolKind, ProviderDescriptor
from inference_gateway.openai.adapter import OpenAICompatibleAdapter
from inference_gateway.tests.utils import TrackingStream, agen, chat_request, openai_sse, run


def _descriptor() -> ProviderDescriptor:
    return ProviderDescriptor(
        id="alpha",
        display_name="Alpha",
        protocol_kind=ProtocolKind.OPENAI_COMPATIBLE,
        base_endpoint="https://alpha.test/v1",
        credential_ref="ALPHA_KEY",
        discovery_path="/models",
    )


def _texts(adapter, chunks):
    async def go():
        return [ev.text async for ev in adapter.normalize_stream(agen(chunks))]

    return run(go())


def test_translate_request_builds_streaming_chat_completion():
    adapter = OpenAICompatibleAdapter(_descriptor())
    req = chat_request(messages=[("system", "be nice"), ("user", "hi")])
    wire = adapter.translate_request(req, "sk-live")
    assert wire.url == "https://alpha.test/v1/chat/completions"  # nosec B101
    assert wire.method == "POST"  # nosec B101
    assert wire.headers["Authorization"] == "Bearer sk-live"  # nosec B101
    assert wire.headers["Accept"] == "text/event-stream"  # nosec B101
    assert wire.params == {}  # nosec B101
    assert wire.json == {  # nosec B101
        "model": "m-1",
        "messages": [{"role": "system", "content": "be nice"}, {"role": "user", "content": "hi"}],
        "stream": True,
    }


def test_concatenated_deltas_equal_upstream_text_for_any_chunking():
    adapter = OpenAICompatibleAdapter(_descriptor())
    parts = ["Hel", "lo, ", "wörld", "!"]
    body = openai_sse(*parts)
    for size in (1, 3, 7, 64, len(body)):
        chunks = [body[i : i + size] for i in range(0, len(body), size)]
        assert "".join(_texts(adapter, chunks)) == "".join(parts)  # nosec B101


def test_done_sentinel_ends_stream_without_parsing():
    adapter = OpenAICompatibleAdapter(_descriptor())
    body = openai_sse("a") + b'data: {"choices":[{"delta":{"content":"late"}}]}\n\n'
    assert _texts(adapter, [body]) == ["a"]  # nosec B101


def test_malformed_frame_is_skipped_and_logged(gateway_events):
    adapter = OpenAICompatibleAdapter(_descriptor())
    body = openai_sse("A", done=False) + b"data: {not json\n\n" + openai_sse("C")
    assert _texts(adapter, [body]) == ["A", "C"]  # nosec B101
    skipped = [e for e in gateway_events() if e["event"] == "stream.frame_skipped"]
    assert len(skipped) == 1  # nosec B101
    assert skipped[0]["provider"] == "alpha"  # nosec B101
    assert skipped[0]["reason"] == "malformed_json"  # nosec B101


def test_role_only_and_empty_choice_frames_emit_nothing():
    adapter = OpenAICompatibleAdapter(_descriptor())
    body = (
        b'data: {"choices":[{"delta":{"role":"assistant"}}]}\n\n'
        b'data: {"choices":[]}\n\n'
        b'data: {"choices":[{"delta":{"content":""}}]}\n\n'
        b'data: {"choices":[{"delta":{"content":"x"}}]}\n\n'
    )
    assert _texts(adapter, [body]) == ["x"]  # nosec B101


def test_open_stream_raises_upstream_error_on_non_2xx():
    stream = TrackingStream([b"rate limited"])

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(429, stream=stream)

    async def go():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            adapter = OpenAICompatibleAdapter(_descriptor(), client_getter=lambda: client)
            await adapter.open_stream(chat_request(), "sk-live")

    with pytest.raises(UpstreamError) as info:
        run(go())
    assert info.value.upstream_status == 429  # nosec B101
    assert "429" in info.value.message  # nosec B101
    assert info.value.provider == "alpha"  # nosec B101
    assert stream.closed  # nosec B101


def test_open_stream_wraps_transport_errors():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    async def go():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            adapter = OpenAICompatibleAdapter(_descriptor(), client_getter=lambda: client)
            await adapter.open_stream(chat_request(), "sk-live")

    with pytest.raises(UpstreamError) as info:
        run(go())
    assert info.value.code is ErrorCode.TIMEOUT  # nosec B101


def test_discovery_request_uses_bearer_auth():
    wire = OpenAICompatibleAdapter(_descriptor()).discovery_request("sk-live")
    assert wire.method == "GET"  # nosec B101
    assert wire.url == "https://alpha.test/v1/models"  # nosec B101
    assert wire.headers == {"Authorization": "Bearer sk-live"}  # nosec B101
