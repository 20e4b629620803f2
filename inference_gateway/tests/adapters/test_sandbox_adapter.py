"""Sandbox adapter: code extraction, execution call and failure mapping."""

from __future__ import annotations

import json

import httpx
import pytest

from inference_gateway.base.errors import SandboxInputError, UpstreamError
from inference_gateway.base.models import ProtocolKind, ProviderDescriptor, SandboxLimits
from inference_gateway.sandbox.adapter import SandboxExecAdapter, extract_code
from inference_gateway.tests.utils import chat_request, run


def _descriptor() -> ProviderDescriptor:
    return ProviderDescriptor(
        id="sandbox",
        display_name="Sandbox",
        protocol_kind=ProtocolKind.SANDBOXED_EXEC,
        base_endpoint="https://sandbox.test",
        credential_ref="SANDBOX_TOKEN",
        default_models=("sandbox-js-executor",),
        sandbox_limits=SandboxLimits(timeout_ms=2000, memory_limit="64MB"),
    )


def _execute(handler, text: str):
    async def go():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            adapter = SandboxExecAdapter(_descriptor(), client_getter=lambda: client)
            req = chat_request(provider="sandbox", model="sandbox-js-executor", messages=[("user", text)])
            return await adapter.execute(req, "tok")

    return run(go())


@pytest.mark.parametrize(
    "text, expected",
    [
        ("```javascript\nconsole.log(1)\n```", "console.log(1)"),
        ("run this:\n```js\nlet a = 1;\na + 1\n```\nthanks", "let a = 1;\na + 1"),
        ("```\n2 * 21\n```", "2 * 21"),
        ("```js\r\n1\r\n```", "1"),
    ],
)
def test_extract_code_accepts_tagged_and_untagged_fences(text, expected):
    assert extract_code(text) == expected  # nosec B101


@pytest.mark.parametrize("text", ["no code here", "`inline`", "```python\nprint(1)\n```"])
def test_extract_code_rejects_other_content(text):
    assert extract_code(text) is None  # nosec B101


def test_translate_request_uses_last_user_message_and_limits():
    adapter = SandboxExecAdapter(_descriptor())
    req = chat_request(
        provider="sandbox",
        model="sandbox-js-executor",
        messages=[("user", "```js\nold()\n```"), ("assistant", "ok"), ("user", "```js\nnew()\n```")],
    )
    wire = adapter.translate_request(req, "tok")
    assert wire.url == "https://sandbox.test/execute"  # nosec B101
    assert wire.headers["Authorization"] == "Bearer tok"  # nosec B101
    assert wire.json == {  # nosec B101
        "language": "javascript",
        "code": "new()",
        "timeout_ms": 2000,
        "memory_limit": "64MB",
    }


def test_missing_code_block_is_input_error():
    adapter = SandboxExecAdapter(_descriptor())
    with pytest.raises(SandboxInputError) as info:
        adapter.translate_request(chat_request(provider="sandbox", messages=[("user", "hello")]), "tok")
    assert info.value.status_code == 400  # nosec B101
    assert info.value.message == "No executable code found"  # nosec B101


def test_execute_returns_runtime_result():
    bodies = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json={"result": "42"})

    assert _execute(handler, "```js\n6 * 7\n```") == "42"  # nosec B101
    assert bodies[0]["code"] == "6 * 7"  # nosec B101


def test_execute_accepts_output_key():
    assert _execute(lambda r: httpx.Response(200, json={"output": "ok"}), "```\n1\n```") == "ok"  # nosec B101


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, text="boom"),
        httpx.Response(200, text="not json"),
        httpx.Response(200, json={"unexpected": True}),
    ],
)
def test_execute_failures_are_upstream_errors(response):
    with pytest.raises(UpstreamError):
        _execute(lambda r: response, "```js\n1\n```")
