"""Model directory caching, staleness and failure behavior."""

from __future__ import annotations

from datetime import timedelta

import httpx
import pytest

from inference_gateway.base.errors import ProviderNotFoundError
from inference_gateway.base.registry import ProviderRegistry
from inference_gateway.base.repositories.model_directory import ModelDirectory, parse_model_ids
from inference_gateway.config.env import CredentialResolver
from inference_gateway.tests.utils import (
    ManualClock,
    ScriptedUpstream,
    catalog,
    models_body,
    provider_entry,
    run,
)


def _setup(routes, environ=None, clock=None):
    reg = ProviderRegistry.from_mapping(
        catalog(
            provider_entry("alpha", default_models=["fallback-model"]),
            provider_entry("gem", "gemini", discovery_path=None, default_models=["g-1", "g-2"]),
            provider_entry("box", "sandboxed-exec", discovery_path=None),
        )
    )
    upstream = ScriptedUpstream(routes)
    creds = CredentialResolver({"ALPHA_KEY": "a-key"} if environ is None else environ)
    clock = clock or ManualClock()
    directory = ModelDirectory(reg, creds, clock=clock, ttl=timedelta(minutes=5), client=upstream.client())
    return directory, upstream, clock


def _models_ok(*ids):
    return lambda request: httpx.Response(200, json=models_body(*ids))


def test_fresh_entry_served_from_cache():
    directory, upstream, clock = _setup({"alpha.test": _models_ok("m-1", "m-2")})
    assert run(directory.list_models("alpha")) == ("m-1", "m-2")  # nosec B101
    clock.advance(minutes=4, seconds=59)
    assert run(directory.list_models("alpha")) == ("m-1", "m-2")  # nosec B101
    assert upstream.hits("alpha.test", "/models") == 1  # nosec B101
    assert upstream.calls[0].headers["Authorization"] == "Bearer a-key"  # nosec B101


def test_stale_entry_is_refetched_and_replaced():
    listings = iter([("m-1",), ("m-2", "m-3")])
    directory, upstream, clock = _setup({"alpha.test": lambda r: httpx.Response(200, json=models_body(*next(listings)))})
    assert run(directory.list_models("alpha")) == ("m-1",)  # nosec B101
    clock.advance(minutes=5, seconds=1)
    assert run(directory.list_models("alpha")) == ("m-2", "m-3")  # nosec B101
    assert upstream.hits("alpha.test") == 2  # nosec B101
    assert directory.store.get("alpha").models == ("m-2", "m-3")  # nosec B101
    assert directory.store.get("alpha").fetched_at == clock.now  # nosec B101


@pytest.mark.parametrize(
    "handler",
    [
        lambda r: httpx.Response(500, text="down"),
        lambda r: httpx.Response(200, text="<html>"),
        lambda r: httpx.Response(200, json={"data": []}),
    ],
    ids=["non-2xx", "non-json", "empty-listing"],
)
def test_failed_fetch_returns_defaults_without_caching(handler):
    directory, upstream, _ = _setup({"alpha.test": handler})
    assert run(directory.list_models("alpha")) == ("fallback-model",)  # nosec B101
    assert directory.store.get("alpha") is None  # nosec B101
    assert run(directory.list_models("alpha")) == ("fallback-model",)  # nosec B101
    assert upstream.hits("alpha.test") == 2  # nosec B101


def test_network_error_returns_defaults_and_next_call_retries():
    state = {"fail": True}

    def handler(request):
        if state["fail"]:
            raise httpx.ConnectError("refused", request=request)
        return httpx.Response(200, json=models_body("m-9"))

    directory, upstream, _ = _setup({"alpha.test": handler})
    assert run(directory.list_models("alpha")) == ("fallback-model",)  # nosec B101
    state["fail"] = False
    assert run(directory.list_models("alpha")) == ("m-9",)  # nosec B101


def test_absent_credential_skips_discovery(gateway_events):
    directory, upstream, _ = _setup({"alpha.test": _models_ok("m-1")}, environ={})
    assert run(directory.list_models("alpha")) == ("fallback-model",)  # nosec B101
    assert upstream.calls == []  # nosec B101
    reasons = [e.get("reason") for e in gateway_events() if e["event"] == "models.fetch_failed"]
    assert reasons == ["no_credential"]  # nosec B101


def test_sandbox_and_no_discovery_providers_need_no_call():
    directory, upstream, _ = _setup({})
    assert run(directory.list_models("box")) == ("sandbox-js-executor",)  # nosec B101
    assert run(directory.list_models("gem")) == ("g-1", "g-2")  # nosec B101
    assert upstream.calls == []  # nosec B101
    assert len(directory.store) == 0  # nosec B101


def test_unknown_provider_raises():
    directory, _, _ = _setup({})
    with pytest.raises(ProviderNotFoundError):
        run(directory.list_models("ghost"))


def test_parse_model_ids_accepts_common_shapes():
    assert parse_model_ids({"data": [{"id": "a"}, {"id": "a"}, {"id": ""}, {"x": 1}]}) == ("a",)  # nosec B101
    assert parse_model_ids({"models": [{"name": "models/gemini-1.5-pro"}]}) == ("gemini-1.5-pro",)  # nosec B101
    assert parse_model_ids(["x", "y"]) == ("x", "y")  # nosec B101
    assert parse_model_ids("garbage") == ()  # nosec B101
