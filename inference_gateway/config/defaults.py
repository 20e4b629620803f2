"""inference_gateway.config.defaults
=================================

Central place for small, stable default values used by the gateway and its
service layer. Environment variables override them at runtime (see
``inference_gateway.config.get_settings``).

This module avoids importing from other gateway packages to prevent
circular dependencies. Only plain constants live here.
"""

from __future__ import annotations

# ---- Service / HTTP layer ----

# Comma-separated list of allowed origins for the dev server.
GATEWAY_CORS_DEFAULT_ORIGINS = "http://localhost:3000,http://127.0.0.1:3000"

# Dev server bind address.
GATEWAY_DEFAULT_HOST = "127.0.0.1"
GATEWAY_DEFAULT_PORT = 8000

# ---- Model directory ----

# Freshness window of a cached model listing, in seconds.
MODEL_DIRECTORY_TTL_SECONDS = 300

# ---- Catalog ----

# Packaged catalog, relative to the ``inference_gateway`` package.
DEFAULT_CATALOG_RESOURCE = "catalog/providers.yaml"

# Env var naming an alternative catalog path.
CATALOG_ENV_VAR = "GATEWAY_PROVIDERS_FILE"

__all__ = [
    "GATEWAY_CORS_DEFAULT_ORIGINS",
    "GATEWAY_DEFAULT_HOST",
    "GATEWAY_DEFAULT_PORT",
    "MODEL_DIRECTORY_TTL_SECONDS",
    "DEFAULT_CATALOG_RESOURCE",
    "CATALOG_ENV_VAR",
]
