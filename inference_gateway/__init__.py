"""inference_gateway package

Multi-provider LLM chat gateway: one chat endpoint in front of several
upstream providers with automatic cross-provider fallback, streamed
responses, a TTL-cached model directory and a sandboxed code-execution
pseudo-provider.

Public API (re-exported):
    - Version: ``__version__``
    - Exceptions: :class:`GatewayError`, :class:`ErrorCode`
    - Core: :class:`ProviderRegistry`, :class:`ModelDirectory`,
      :class:`FallbackOrchestrator`, :class:`CredentialResolver`
    - Composition: :func:`build_container`
"""

from .base.errors import ErrorCode, GatewayError
from .base.registry import ProviderRegistry
from .base.repositories.model_directory import ModelDirectory
from .base.resilience import FallbackOrchestrator
from .config.env import CredentialResolver
from .di.container import GatewayContainer, build_container

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ErrorCode",
    "GatewayError",
    "ProviderRegistry",
    "ModelDirectory",
    "FallbackOrchestrator",
    "CredentialResolver",
    "GatewayContainer",
    "build_container",
]
