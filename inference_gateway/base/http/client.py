"""Shared HTTP client pool for upstream calls.

Purpose:
    Provide a centralized pool of reusable ``httpx.AsyncClient`` instances so
    adapters, model discovery and the sandbox runner do not allocate a new
    connection pool per request.

Timeout strategy:
    Clients carry no default timeout of their own; every call site passes
    an explicit ``httpx.Timeout`` built from :func:`get_timeout_config`
    (streaming calls use an idle read timeout, plain calls a total one).

Lifecycle & cleanup:
    - Clients are cached by ``purpose`` (e.g. "chat", "discovery",
      "sandbox").
    - The service awaits :func:`close_all_clients` at shutdown; tests may call
      it between cases.
"""

from __future__ import annotations

import threading
from typing import Dict

import httpx

_CLIENTS: Dict[str, httpx.AsyncClient] = {}
_LOCK = threading.Lock()


def get_httpx_client(purpose: str) -> httpx.AsyncClient:
    """Return a pooled ``httpx.AsyncClient`` for the given purpose.

    Parameters:
        purpose: A short string discriminating separate pools (e.g.,
            "chat", "discovery"). Keep stable to maximize reuse.

    Thread-safety:
        Per-key creation is guarded by a lock; lookups of existing clients
        are lock-free.
    """
    client = _CLIENTS.get(purpose)
    if client is not None and not client.is_closed:
        return client
    with _LOCK:
        client = _CLIENTS.get(purpose)
        if client is None or client.is_closed:
            client = httpx.AsyncClient(follow_redirects=True)
            _CLIENTS[purpose] = client
        return client


async def close_all_clients() -> None:
    """Close and clear all pooled HTTP clients."""
    with _LOCK:
        clients = list(_CLIENTS.values())
        _CLIENTS.clear()
    for c in clients:
        await c.aclose()


__all__ = ["get_httpx_client", "close_all_clients"]
