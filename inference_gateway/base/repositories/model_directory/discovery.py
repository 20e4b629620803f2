"""Model discovery call for HTTP-backed providers.

Sends the adapter's discovery request with the pooled ``discovery`` client
and parses the listing. Every failure (transport error, timeout, non-2xx,
non-JSON or empty listing) is raised as :class:`UpstreamError`; the model
directory decides what to do with it.
"""

from __future__ import annotations

from typing import Optional, Tuple

import httpx

from ...errors import UpstreamError, classify_exception
from ...http import get_httpx_client
from ...interfaces import SupportsStreaming
from ...models import ProviderDescriptor
from ...timeouts import get_timeout_config
from .parsing import parse_model_ids


async def fetch_models(
    descriptor: ProviderDescriptor,
    adapter: SupportsStreaming,
    credential: str,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> Tuple[str, ...]:
    """Return the model ids the provider currently advertises."""
    wire = adapter.discovery_request(credential)
    http = client or get_httpx_client("discovery")
    try:
        response = await http.request(
            wire.method,
            wire.url,
            headers=wire.headers,
            params=wire.params or None,
            timeout=get_timeout_config().request_timeout(),
        )
    except httpx.HTTPError as exc:
        raise UpstreamError(
            f"Model discovery for {descriptor.id} failed: {exc.__class__.__name__}",
            provider=descriptor.id,
            code=classify_exception(exc),
            raw=exc,
        ) from exc
    if not response.is_success:
        raise UpstreamError(
            f"Model discovery for {descriptor.id} failed: {response.status_code} {response.reason_phrase}",
            provider=descriptor.id,
            upstream_status=response.status_code,
        )
    try:
        payload = response.json()
    except ValueError as exc:
        raise UpstreamError(
            f"Model discovery for {descriptor.id} returned a non-JSON body",
            provider=descriptor.id,
            raw=exc,
        ) from exc
    models = parse_model_ids(payload)
    if not models:
        raise UpstreamError(f"Model discovery for {descriptor.id} returned no models", provider=descriptor.id)
    return models


__all__ = ["fetch_models"]
