"""Model Directory: cached answer to "which models does provider X offer?".

Algorithm for :meth:`ModelDirectory.list_models`:

1. A fresh cache entry is returned verbatim.
2. ``sandboxed-exec`` providers answer with their fixed single model.
3. HTTP providers with a ``discovery_path`` and a credential are asked
   upstream. Success replaces the cache entry (``fetched_at = now``).
   Failure, a missing credential, or no discovery path yields the
   descriptor's ``default_models`` and writes nothing, so the next call
   retries instead of waiting out a TTL.

Concurrent calls for the same provider may both fetch; the later write wins.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Callable, Optional, Tuple, cast

import httpx

from ...constants import SANDBOX_MODEL_ID
from ...errors import GatewayError
from ...interfaces import SupportsStreaming
from ...logging import LogContext, get_logger, log_event
from ...models import ModelDirectoryEntry, ProtocolKind
from .discovery import fetch_models
from .store import InMemoryModelDirectoryStore

if TYPE_CHECKING:
    from ....config.env import CredentialResolver
    from ...registry import ProviderRegistry

Clock = Callable[[], datetime]

DEFAULT_TTL = timedelta(minutes=5)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ModelDirectory:
    """Per-provider model listing with a TTL cache."""

    def __init__(
        self,
        registry: "ProviderRegistry",
        credentials: "CredentialResolver",
        *,
        store: Optional[InMemoryModelDirectoryStore] = None,
        clock: Optional[Clock] = None,
        ttl: timedelta = DEFAULT_TTL,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._registry = registry
        self._credentials = credentials
        self._store = store if store is not None else InMemoryModelDirectoryStore()
        self._clock = clock or utc_now
        self._ttl = ttl
        self._client = client
        self._logger = get_logger("gateway.models")

    @property
    def store(self) -> InMemoryModelDirectoryStore:
        return self._store

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    async def list_models(self, provider_id: str) -> Tuple[str, ...]:
        """Return the model ids for ``provider_id``.

        Raises:
            ProviderNotFoundError: ``provider_id`` is not registered.
        """
        descriptor = self._registry.lookup(provider_id)
        ctx = LogContext(provider=provider_id)

        entry = self._store.get(provider_id)
        if entry is not None and not entry.is_stale(self._clock(), self._ttl):
            log_event(self._logger, "models.cache_hit", ctx, level=logging.DEBUG, count=len(entry.models))
            return entry.models

        if descriptor.protocol_kind is ProtocolKind.SANDBOXED_EXEC:
            return (SANDBOX_MODEL_ID,)

        if not descriptor.discovery_path:
            return descriptor.default_models

        credential = self._credentials.resolve(descriptor)
        if credential is None:
            log_event(self._logger, "models.fetch_failed", ctx, level=logging.INFO, reason="no_credential")
            return descriptor.default_models

        adapter = cast(SupportsStreaming, self._registry.adapter_for(provider_id))
        try:
            models = await fetch_models(descriptor, adapter, credential, client=self._client)
        except GatewayError as exc:
            log_event(
                self._logger,
                "models.fetch_failed",
                ctx,
                level=logging.WARNING,
                reason=exc.code.value,
                error=exc.message,
            )
            return descriptor.default_models

        self._store.put(ModelDirectoryEntry(provider_id=provider_id, models=models, fetched_at=self._clock()))
        log_event(self._logger, "models.fetch", ctx, count=len(models))
        return models


__all__ = ["ModelDirectory", "Clock", "DEFAULT_TTL", "utc_now"]
