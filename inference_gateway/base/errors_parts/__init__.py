"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `inference_gateway.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .gateway_error import (
    CatalogConfigError,
    FallbackExhaustedError,
    GatewayError,
    InvalidRequestError,
    MissingCredentialError,
    ProviderNotFoundError,
    SandboxInputError,
    UpstreamError,
)
from .classification import classify_exception

__all__ = [
    "ErrorCode",
    "GatewayError",
    "InvalidRequestError",
    "ProviderNotFoundError",
    "MissingCredentialError",
    "UpstreamError",
    "FallbackExhaustedError",
    "SandboxInputError",
    "CatalogConfigError",
    "classify_exception",
]
