"""ProtocolAdapter Protocol (single-class module).

Contract shared by every adapter: it is bound to one provider descriptor and
translates canonical chat requests into that provider's wire format.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..models import CanonicalChatRequest, ProtocolKind, ProviderDescriptor, WireRequest


@runtime_checkable
class ProtocolAdapter(Protocol):
    """Adapter bound to a single provider descriptor."""

    kind: ProtocolKind
    descriptor: ProviderDescriptor

    def translate_request(self, request: CanonicalChatRequest, credential: str) -> WireRequest:  # pragma: no cover - interface
        """Build the provider-specific request for ``request``.

        Raises:
            SandboxInputError: sandboxed-exec adapters only, when the last
                user message carries no executable block.
        """
        ...
