"""Unified gateway error taxonomy public surface.

This module re-exports the implementations under
``inference_gateway.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts import (
    CatalogConfigError,
    ErrorCode,
    FallbackExhaustedError,
    GatewayError,
    InvalidRequestError,
    MissingCredentialError,
    ProviderNotFoundError,
    SandboxInputError,
    UpstreamError,
    classify_exception,
)

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
