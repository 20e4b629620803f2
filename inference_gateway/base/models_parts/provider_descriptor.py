"""
Provider descriptors loaded from the static catalog.

A `ProviderDescriptor` identifies one upstream backend and the wire protocol
it speaks. Descriptors are created once at startup by the registry and are
shared read-only for the life of the process.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class ProtocolKind(str, Enum):
    """Wire-format family spoken by a provider."""

    OPENAI_COMPATIBLE = "openai-compatible"
    GEMINI = "gemini"
    SANDBOXED_EXEC = "sandboxed-exec"

    @property
    def is_http_streaming(self) -> bool:
        return self is not ProtocolKind.SANDBOXED_EXEC


@dataclass(frozen=True)
class SandboxLimits:
    """Execution limits forwarded to the sandboxed runtime."""

    timeout_ms: int
    memory_limit: str


@dataclass(frozen=True)
class ProviderDescriptor:
    """Static description of one provider.

    Attributes:
        id: Registry-unique provider id.
        display_name: Human-friendly name.
        protocol_kind: Wire protocol family.
        base_endpoint: Base URL for upstream calls (no trailing slash).
        credential_ref: Canonical environment variable holding the secret.
        credential_aliases: Additional variables consulted in order when the
            canonical one is unset.
        discovery_path: Path appended to ``base_endpoint`` for model listing.
        default_models: Models assumed available when discovery is not
            possible.
        sandbox_limits: Limits for ``sandboxed-exec`` providers.
    """

    id: str
    display_name: str
    protocol_kind: ProtocolKind
    base_endpoint: Optional[str] = None
    credential_ref: Optional[str] = None
    credential_aliases: Tuple[str, ...] = ()
    discovery_path: Optional[str] = None
    default_models: Tuple[str, ...] = ()
    sandbox_limits: Optional[SandboxLimits] = None

    def credential_refs(self) -> Tuple[str, ...]:
        """Return every credential variable name, canonical first."""
        names = ((self.credential_ref,) if self.credential_ref else ()) + self.credential_aliases
        return tuple(dict.fromkeys(n for n in names if n))

    def endpoint(self, path: str) -> str:
        """Join ``path`` onto the base endpoint."""
        base = (self.base_endpoint or "").rstrip("/")
        return f"{base}/{path.lstrip('/')}"


__all__ = ["ProtocolKind", "SandboxLimits", "ProviderDescriptor"]
