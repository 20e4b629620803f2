"""
Structured gateway error exception types.

`GatewayError` wraps failures with a normalized `ErrorCode`; the subclasses
form the request-level taxonomy. Each subclass carries the HTTP status the
service boundary answers with when the error escapes a request.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from .error_code import ErrorCode


@dataclass
class GatewayError(Exception):
    """Represents a structured gateway error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging and for the
            plain-text body returned to callers.
        provider: Provider id where the error originated, when known.
        model: Optional model id associated with the failure.
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    provider: Optional[str] = None
    model: Optional[str] = None
    raw: Optional[Exception] = None

    status_code: ClassVar[int] = 500

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.message


class InvalidRequestError(GatewayError):
    """Malformed or missing request fields. Terminal, never retried."""

    status_code: ClassVar[int] = 400

    def __init__(self, message: str, *, provider: Optional[str] = None, model: Optional[str] = None) -> None:
        super().__init__(ErrorCode.VALIDATION, message, provider, model)


class ProviderNotFoundError(GatewayError):
    """The requested provider id is not in the registry."""

    status_code: ClassVar[int] = 404

    def __init__(self, provider: str, message: str = "Provider not found") -> None:
        super().__init__(ErrorCode.NOT_FOUND, message, provider)


class MissingCredentialError(GatewayError):
    """The explicitly requested provider has no resolvable credential.

    Raised only for the primary provider; fallback candidates without a
    credential are skipped instead.
    """

    status_code: ClassVar[int] = 401

    def __init__(self, provider: str, message: str = "API key not configured") -> None:
        super().__init__(ErrorCode.AUTH, message, provider)


class UpstreamError(GatewayError):
    """Network failure, timeout or non-2xx reply from an upstream provider.

    Recoverable inside the fallback cascade. Only the sandbox path lets it
    reach the caller directly.
    """

    status_code: ClassVar[int] = 503

    def __init__(
        self,
        message: str,
        *,
        provider: Optional[str] = None,
        model: Optional[str] = None,
        code: ErrorCode = ErrorCode.UPSTREAM,
        raw: Optional[Exception] = None,
        upstream_status: Optional[int] = None,
    ) -> None:
        super().__init__(code, message, provider, model, raw)
        self.upstream_status = upstream_status


class FallbackExhaustedError(GatewayError):
    """No candidate (primary or fallback) produced a live stream."""

    status_code: ClassVar[int] = 503

    def __init__(self, model: str, last_error: Optional[BaseException]) -> None:
        detail = str(last_error) if last_error is not None else "no provider offers this model"
        message = (
            f"Model unavailable: All providers for {model} failed. "
            f"Try a different model. Last error: {detail}"
        )
        super().__init__(ErrorCode.UNAVAILABLE, message, None, model)
        self.last_error = last_error


class SandboxInputError(GatewayError):
    """The final user message carries no executable fenced code block."""

    status_code: ClassVar[int] = 400

    def __init__(self, provider: str, message: str = "No executable code found") -> None:
        super().__init__(ErrorCode.VALIDATION, message, provider)


class CatalogConfigError(GatewayError):
    """The static provider catalog is missing or malformed (startup only)."""

    def __init__(self, message: str) -> None:
        super().__init__(ErrorCode.CONFIG, message)


__all__ = [
    "GatewayError",
    "InvalidRequestError",
    "ProviderNotFoundError",
    "MissingCredentialError",
    "UpstreamError",
    "FallbackExhaustedError",
    "SandboxInputError",
    "CatalogConfigError",
]
