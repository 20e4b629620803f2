"""
Gateway Base Package

Exports protocol-agnostic contracts, domain models, the provider registry,
the model directory and the fallback orchestrator for use by the service
layer and the composition root.

Layout:
- Interfaces: adapter capability Protocols
- Models: immutable request/descriptor/stream types
- Registry + Factory: catalog-driven provider lookup and adapter creation
- Repositories: TTL-cached model directory
- Resilience: fallback orchestration across providers
"""

from .errors import (
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
from .factory import AdapterFactory, UnknownAdapterError
from .interfaces import ProtocolAdapter, SupportsExecution, SupportsStreaming
from .models import (
    CanonicalChatRequest,
    ChatMessage,
    FallbackAttempt,
    ModelDirectoryEntry,
    ProtocolKind,
    ProviderDescriptor,
    SandboxLimits,
    TextDeltaEvent,
    WireRequest,
)
from .registry import ProviderRegistry
from .repositories.model_directory import InMemoryModelDirectoryStore, ModelDirectory
from .resilience import ChatOutcome, FallbackOrchestrator
from .streaming import HttpStreamingAdapter, LiveStream
from .timeouts import TimeoutConfig, get_timeout_config

__all__ = [
    "CatalogConfigError",
    "ErrorCode",
    "FallbackExhaustedError",
    "GatewayError",
    "InvalidRequestError",
    "MissingCredentialError",
    "ProviderNotFoundError",
    "SandboxInputError",
    "UpstreamError",
    "classify_exception",
    "AdapterFactory",
    "UnknownAdapterError",
    "ProtocolAdapter",
    "SupportsExecution",
    "SupportsStreaming",
    "CanonicalChatRequest",
    "ChatMessage",
    "FallbackAttempt",
    "ModelDirectoryEntry",
    "ProtocolKind",
    "ProviderDescriptor",
    "SandboxLimits",
    "TextDeltaEvent",
    "WireRequest",
    "ProviderRegistry",
    "InMemoryModelDirectoryStore",
    "ModelDirectory",
    "ChatOutcome",
    "FallbackOrchestrator",
    "HttpStreamingAdapter",
    "LiveStream",
    "TimeoutConfig",
    "get_timeout_config",
]
