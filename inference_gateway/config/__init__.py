"""Unified configuration layer for the gateway.

Goals
-----
* Load a local ``.env`` once before credentials are read.
* Resolve the provider catalog location (``GATEWAY_PROVIDERS_FILE`` or the
  packaged ``catalog/providers.yaml``) and parse it with PyYAML.
* Expose service settings (CORS origins, bind address, model-directory TTL)
  merged from defaults and environment variables.

Public API
----------
* load_dotenv_once() -> None
* catalog_path() -> Path
* load_catalog_document(path=None) -> dict
* get_settings() -> GatewaySettings
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml

from ..base.errors import CatalogConfigError
from .defaults import (
    CATALOG_ENV_VAR,
    DEFAULT_CATALOG_RESOURCE,
    GATEWAY_CORS_DEFAULT_ORIGINS,
    GATEWAY_DEFAULT_HOST,
    GATEWAY_DEFAULT_PORT,
    MODEL_DIRECTORY_TTL_SECONDS,
)
from .env import CredentialResolver, is_placeholder

_DOTENV_LOADED = False


def load_dotenv_once() -> None:
    """Lightweight .env loader.

    Parses KEY=VALUE lines, ignoring comments and blank lines. Safe to call
    multiple times. Overrides existing environment variables only if their
    current values appear to be placeholders.
    """
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    path = os.getenv("DOTENV_FILE", ".env")
    if not os.path.isfile(path):
        _DOTENV_LOADED = True
        return
    try:
        with open(path, "r", encoding="utf-8") as fh:
            for line in fh:
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                if line.startswith("export "):
                    line = line[len("export "):]
                if "=" not in line:
                    continue
                k, v = line.split("=", 1)
                k = k.strip()
                v = v.strip().strip('"').strip("'")
                if k and (k not in os.environ or is_placeholder(os.environ.get(k))):
                    os.environ[k] = v
    finally:
        _DOTENV_LOADED = True


def catalog_path() -> Path:
    """Return the catalog file to load."""
    override = os.getenv(CATALOG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path(__file__).resolve().parent.parent / DEFAULT_CATALOG_RESOURCE


def load_catalog_document(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """Read and parse the catalog document.

    JSON documents are accepted as well since JSON is a subset of YAML.

    Raises:
        CatalogConfigError: the file is missing, unreadable, not valid YAML,
            or its top level is not a mapping.
    """
    p = Path(path) if path is not None else catalog_path()
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as exc:
        raise CatalogConfigError(f"Cannot read provider catalog '{p}': {exc}") from exc
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise CatalogConfigError(f"Provider catalog '{p}' is not valid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise CatalogConfigError(f"Provider catalog '{p}' must be a mapping with a 'providers' list")
    return data


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = int(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class GatewaySettings:
    """Service-level settings merged from defaults and the environment."""

    cors_origins: Tuple[str, ...]
    host: str
    port: int
    reload: bool
    model_cache_ttl_seconds: int


def get_settings() -> GatewaySettings:
    """Return settings read from the current environment.

    Merge order (later wins): defaults -> ``.env`` -> process environment.
    """
    load_dotenv_once()
    origins = os.getenv("GATEWAY_CORS_ORIGINS", GATEWAY_CORS_DEFAULT_ORIGINS)
    return GatewaySettings(
        cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
        host=os.getenv("GATEWAY_HOST", GATEWAY_DEFAULT_HOST),
        port=_env_int("GATEWAY_PORT", GATEWAY_DEFAULT_PORT),
        reload=_env_bool("GATEWAY_RELOAD"),
        model_cache_ttl_seconds=_env_int("GATEWAY_MODEL_CACHE_TTL_SECONDS", MODEL_DIRECTORY_TTL_SECONDS),
    )


__all__ = [
    "CredentialResolver",
    "GatewaySettings",
    "catalog_path",
    "get_settings",
    "is_placeholder",
    "load_catalog_document",
    "load_dotenv_once",
]
