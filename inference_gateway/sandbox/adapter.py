"""SandboxExecAdapter.

Runs the fenced code block of the final user message in an external
sandboxed runtime and returns its textual result in one piece. This is a
request/response call, not a stream.

Wire format
-----------
- POST ``<base_endpoint>/execute`` with ``Authorization: Bearer``.
- Body ``{"language": "javascript", "code", "timeout_ms", "memory_limit"}``
  where the limits come from the descriptor's ``sandbox_limits``.
- Reply ``{"result": "..."}`` (``{"output": "..."}`` is accepted too).

Failure semantics
-----------------
- No fenced block in the final user message: :class:`SandboxInputError`
  (a request problem, never a provider failure).
- Transport error, timeout, non-2xx or malformed reply: :class:`UpstreamError`.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, ClassVar, Dict, Optional

import httpx

from ..base.constants import SANDBOX_CODE_PATTERN
from ..base.errors import SandboxInputError, UpstreamError, classify_exception
from ..base.http import get_httpx_client
from ..base.logging import LogContext, get_logger, log_event
from ..base.models import CanonicalChatRequest, ProtocolKind, ProviderDescriptor, WireRequest
from ..base.timeouts import get_timeout_config

EXECUTE_PATH = "/execute"
SANDBOX_LANGUAGE = "javascript"

_CODE_RE = re.compile(SANDBOX_CODE_PATTERN)


def extract_code(text: str) -> Optional[str]:
    """Return the body of the first fenced (optionally js-tagged) block."""
    match = _CODE_RE.search(text or "")
    if match is None:
        return None
    code = match.group(1)
    return code if code.strip() else None


class SandboxExecAdapter:
    """Adapter for ``sandboxed-exec`` providers."""

    kind: ClassVar[ProtocolKind] = ProtocolKind.SANDBOXED_EXEC

    def __init__(
        self,
        descriptor: ProviderDescriptor,
        *,
        client_getter: Optional[Callable[[], httpx.AsyncClient]] = None,
    ) -> None:
        self.descriptor = descriptor
        self._client_getter = client_getter or (lambda: get_httpx_client("sandbox"))
        self._logger = get_logger("gateway.sandbox")

    @property
    def provider_id(self) -> str:
        return self.descriptor.id

    def supports_streaming(self) -> bool:
        return False

    def translate_request(self, request: CanonicalChatRequest, credential: str) -> WireRequest:
        last = request.last_user_message()
        code = extract_code(last.content) if last is not None else None
        if code is None:
            raise SandboxInputError(self.provider_id)
        limits = self.descriptor.sandbox_limits
        body: Dict[str, Any] = {"language": SANDBOX_LANGUAGE, "code": code}
        if limits is not None:
            body["timeout_ms"] = limits.timeout_ms
            body["memory_limit"] = limits.memory_limit
        return WireRequest(
            url=self.descriptor.endpoint(EXECUTE_PATH),
            json=body,
            headers={"Authorization": f"Bearer {credential}", "Content-Type": "application/json"},
        )

    async def execute(
        self,
        request: CanonicalChatRequest,
        credential: str,
        *,
        client: Optional[httpx.AsyncClient] = None,
    ) -> str:
        """Run the request's code block and return the runtime's result."""
        wire = self.translate_request(request, credential)
        ctx = LogContext(provider=self.provider_id, model=request.model_id)
        log_event(self._logger, "sandbox.execute", ctx, code_chars=len(wire.json["code"]))
        http = client or self._client_getter()
        try:
            response = await http.request(
                wire.method,
                wire.url,
                json=wire.json,
                headers=wire.headers,
                timeout=self._timeout(),
            )
        except httpx.HTTPError as exc:
            code = classify_exception(exc)
            log_event(self._logger, "sandbox.error", ctx, level=logging.WARNING, error_code=code.value)
            raise UpstreamError(
                f"Sandbox execution failed: {exc.__class__.__name__}",
                provider=self.provider_id,
                model=request.model_id,
                code=code,
                raw=exc,
            ) from exc
        if not response.is_success:
            log_event(self._logger, "sandbox.error", ctx, level=logging.WARNING, status=response.status_code)
            raise UpstreamError(
                f"Sandbox execution failed: {response.status_code} {response.reason_phrase}",
                provider=self.provider_id,
                model=request.model_id,
                upstream_status=response.status_code,
            )
        return self._parse_result(response, ctx, request.model_id)

    def _timeout(self) -> httpx.Timeout:
        base = get_timeout_config().request_timeout()
        limits = self.descriptor.sandbox_limits
        if limits is None:
            return base
        # leave the runtime its full execution budget plus the usual overhead
        total = limits.timeout_ms / 1000.0 + (base.read or 0.0)
        return httpx.Timeout(total, connect=base.connect)

    def _parse_result(self, response: httpx.Response, ctx: LogContext, model: str) -> str:
        try:
            payload = response.json()
        except ValueError as exc:
            log_event(self._logger, "sandbox.error", ctx, level=logging.WARNING, reason="non_json")
            raise UpstreamError(
                "Sandbox execution failed: malformed response",
                provider=self.provider_id,
                model=model,
                raw=exc,
            ) from exc
        if isinstance(payload, dict):
            for key in ("result", "output"):
                value = payload.get(key)
                if isinstance(value, str):
                    return value
        log_event(self._logger, "sandbox.error", ctx, level=logging.WARNING, reason="missing_result")
        raise UpstreamError("Sandbox execution failed: malformed response", provider=self.provider_id, model=model)


__all__ = ["SandboxExecAdapter", "extract_code", "EXECUTE_PATH"]
