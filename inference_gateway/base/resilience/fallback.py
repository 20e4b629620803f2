"""Fallback orchestration for chat requests.

Purpose
-------
Drive one chat request from the requested (primary) provider to a live
stream, falling back to other providers that offer the same model when the
primary fails before streaming starts.

Attempt state machine
---------------------
- Start: resolve the provider (unknown id -> ``ProviderNotFoundError``) and
  its credential (absent -> ``MissingCredentialError``; the caller picked this
  provider explicitly, so there is no fallback).
- Sandbox: ``sandboxed-exec`` providers run once and return a single result.
  Their failures reach the caller directly.
- PrimaryAttempt: open the primary stream. An ``UpstreamError`` moves on to
  FallbackSearch.
- FallbackSearch: walk the other HTTP providers in registry order, skipping
  those without a credential or without the model in their directory
  listing. The first live stream wins. The candidate sequence is lazy, so
  directory lookups stop as soon as one candidate succeeds.
- Exhausted: ``FallbackExhaustedError`` naming the model and the last error
  seen (later failures replace earlier ones).

Once a stream has been handed out no further fallback happens; mid-stream
failures belong to the relay.
"""

from __future__ import annotations

import logging
from contextlib import aclosing
from dataclasses import dataclass
from typing import TYPE_CHECKING, AsyncIterator, List, Optional, Tuple, cast

from ..errors import FallbackExhaustedError, MissingCredentialError, UpstreamError
from ..interfaces import SupportsExecution, SupportsStreaming
from ..logging import LogContext, get_logger, log_event, normalized_log_event
from ..models import CanonicalChatRequest, FallbackAttempt, ProtocolKind, ProviderDescriptor
from ..streaming import LiveStream

if TYPE_CHECKING:
    from ...config.env import CredentialResolver
    from ..registry import ProviderRegistry
    from ..repositories.model_directory import ModelDirectory


@dataclass(frozen=True)
class ChatOutcome:
    """Result of :meth:`FallbackOrchestrator.run`.

    Exactly one of ``stream`` (HTTP providers) or ``result`` (sandbox) is set.
    """

    provider_id: str
    stream: Optional[LiveStream] = None
    result: Optional[str] = None
    attempts: Tuple[FallbackAttempt, ...] = ()

    @property
    def is_stream(self) -> bool:
        return self.stream is not None


class FallbackOrchestrator:
    """Route a canonical chat request to a live stream or a sandbox result."""

    def __init__(
        self,
        registry: "ProviderRegistry",
        credentials: "CredentialResolver",
        directory: "ModelDirectory",
    ) -> None:
        self._registry = registry
        self._credentials = credentials
        self._directory = directory
        self._logger = get_logger("gateway.fallback")

    async def run(self, request: CanonicalChatRequest, *, request_id: Optional[str] = None) -> ChatOutcome:
        """Resolve, attempt and fall back for ``request``.

        Raises:
            ProviderNotFoundError: unknown primary provider.
            MissingCredentialError: primary provider has no credential.
            SandboxInputError: sandbox request without a code block.
            UpstreamError: sandbox runtime failure.
            FallbackExhaustedError: no provider produced a stream.
        """
        descriptor = self._registry.lookup(request.provider_id)
        ctx = LogContext(provider=descriptor.id, model=request.model_id, request_id=request_id)
        normalized_log_event(self._logger, "chat.start", ctx, phase="start", protocol=descriptor.protocol_kind.value)

        credential = self._credentials.resolve(descriptor)
        if credential is None:
            raise MissingCredentialError(descriptor.id)

        adapter = self._registry.adapter_for(descriptor.id)
        if descriptor.protocol_kind is ProtocolKind.SANDBOXED_EXEC:
            result = await cast(SupportsExecution, adapter).execute(request, credential)
            return ChatOutcome(
                provider_id=descriptor.id,
                result=result,
                attempts=(FallbackAttempt(descriptor.id, "success"),),
            )

        attempts: List[FallbackAttempt] = []
        try:
            stream = await cast(SupportsStreaming, adapter).open_stream(request, credential)
        except UpstreamError as exc:
            last_error: UpstreamError = exc
            attempts.append(FallbackAttempt(descriptor.id, "error", exc.message))
            normalized_log_event(
                self._logger,
                "chat.primary_failed",
                ctx,
                phase="primary",
                attempt=1,
                error_code=exc.code.value,
                level=logging.WARNING,
                error=exc.message,
            )
        else:
            attempts.append(FallbackAttempt(descriptor.id, "success"))
            return ChatOutcome(provider_id=descriptor.id, stream=stream, attempts=tuple(attempts))

        attempt_no = 1
        async with aclosing(self._candidates(request, ctx)) as candidates:
            async for candidate, candidate_credential in candidates:
                attempt_no += 1
                cctx = ctx.for_provider(candidate.id)
                normalized_log_event(self._logger, "fallback.attempt", cctx, phase="fallback", attempt=attempt_no)
                try:
                    candidate_adapter = cast(SupportsStreaming, self._registry.adapter_for(candidate.id))
                    stream = await candidate_adapter.open_stream(request, candidate_credential)
                except UpstreamError as exc:
                    last_error = exc
                    attempts.append(FallbackAttempt(candidate.id, "error", exc.message))
                    normalized_log_event(
                        self._logger,
                        "fallback.error",
                        cctx,
                        phase="fallback",
                        attempt=attempt_no,
                        error_code=exc.code.value,
                        level=logging.WARNING,
                        error=exc.message,
                    )
                    continue
                attempts.append(FallbackAttempt(candidate.id, "success"))
                normalized_log_event(self._logger, "fallback.success", cctx, phase="fallback", attempt=attempt_no)
                return ChatOutcome(provider_id=candidate.id, stream=stream, attempts=tuple(attempts))

        normalized_log_event(
            self._logger,
            "fallback.exhausted",
            ctx,
            phase="fallback",
            attempt=attempt_no,
            error_code=last_error.code.value,
            level=logging.ERROR,
            tried=[a.provider_id for a in attempts],
        )
        raise FallbackExhaustedError(request.model_id, last_error)

    async def _candidates(
        self, request: CanonicalChatRequest, ctx: LogContext
    ) -> AsyncIterator[Tuple[ProviderDescriptor, str]]:
        """Yield usable fallback providers lazily, in registry order."""
        for descriptor in self._registry.streaming_descriptors():
            if descriptor.id == request.provider_id:
                continue
            cctx = ctx.for_provider(descriptor.id)
            credential = self._credentials.resolve(descriptor)
            if credential is None:
                log_event(self._logger, "fallback.skip", cctx, level=logging.DEBUG, reason="no_credential")
                continue
            models = await self._directory.list_models(descriptor.id)
            if request.model_id not in models:
                log_event(self._logger, "fallback.skip", cctx, level=logging.DEBUG, reason="model_unlisted")
                continue
            yield descriptor, credential


__all__ = ["ChatOutcome", "FallbackOrchestrator"]
