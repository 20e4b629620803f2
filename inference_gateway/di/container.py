"""Minimal dependency injection container for the gateway.

Goals:
- Centralize construction of the shared registry, credential resolver,
  model directory and orchestrator.
- Let tests swap any piece (catalog, environment, clock) through ``config``
  without touching call sites.

Recognized ``config`` keys:
    catalog: already-parsed catalog mapping (skips file loading)
    catalog_path: catalog file to load instead of the configured one
    environ: mapping the credential resolver reads from
    clock: zero-argument callable returning an aware ``datetime``
    ttl: ``timedelta`` freshness window for the model directory
    adapter_builder: callable ``descriptor -> adapter``
    http_client: ``httpx.AsyncClient`` used for every upstream call
        (adapters and model discovery) instead of the pooled clients
"""

from __future__ import annotations

from datetime import timedelta
from typing import Any, Dict

from ..base.factory import AdapterFactory
from ..base.registry import ProviderRegistry
from ..base.repositories.model_directory import ModelDirectory
from ..base.resilience import FallbackOrchestrator
from ..config import GatewaySettings, get_settings
from ..config.env import CredentialResolver


class GatewayContainer:
    """Dependency injection container for gateway services and singletons."""

    def __init__(self, config: Dict[str, Any] | None = None) -> None:
        self._config = config or {}
        self._singletons: Dict[str, Any] = {}

    def _once(self, key: str, factory):
        if key not in self._singletons:
            self._singletons[key] = factory()
        return self._singletons[key]

    def settings(self) -> GatewaySettings:
        return self._once("settings", get_settings)

    def registry(self) -> ProviderRegistry:
        """Return the shared registry, loading the catalog on first use.

        Raises:
            CatalogConfigError: the catalog is missing or malformed.
        """

        def build() -> ProviderRegistry:
            kwargs: Dict[str, Any] = {}
            client = self._config.get("http_client")
            if self._config.get("adapter_builder") is not None:
                kwargs["adapter_builder"] = self._config["adapter_builder"]
            elif client is not None:
                kwargs["adapter_builder"] = lambda d: AdapterFactory.create(d, client_getter=lambda: client)
            if self._config.get("catalog") is not None:
                return ProviderRegistry.from_mapping(self._config["catalog"], **kwargs)
            return ProviderRegistry.from_catalog(self._config.get("catalog_path"), **kwargs)

        return self._once("registry", build)

    def credentials(self) -> CredentialResolver:
        return self._once("credentials", lambda: CredentialResolver(self._config.get("environ")))

    def directory(self) -> ModelDirectory:
        def build() -> ModelDirectory:
            ttl = self._config.get("ttl") or timedelta(seconds=self.settings().model_cache_ttl_seconds)
            return ModelDirectory(
                self.registry(),
                self.credentials(),
                clock=self._config.get("clock"),
                ttl=ttl,
                client=self._config.get("http_client"),
            )

        return self._once("directory", build)

    def orchestrator(self) -> FallbackOrchestrator:
        return self._once(
            "orchestrator",
            lambda: FallbackOrchestrator(self.registry(), self.credentials(), self.directory()),
        )

    def clear(self) -> None:  # testing convenience
        self._singletons.clear()


def build_container(config: Dict[str, Any] | None = None) -> GatewayContainer:
    """Construct and return a new :class:`GatewayContainer`."""
    return GatewayContainer(config=config)


__all__ = ["GatewayContainer", "build_container"]
