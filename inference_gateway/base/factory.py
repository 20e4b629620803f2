"""Adapter factory.

Purpose
-------
Map a provider's ``protocol_kind`` to the adapter class that speaks it and
construct one adapter per descriptor. Adapter modules are imported lazily
with ``importlib`` so the factory layer stays free of protocol code.

Timeout and fallback semantics
------------------------------
None. The factory either returns an adapter or raises
:class:`UnknownAdapterError`.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Tuple, Type

from .errors import CatalogConfigError
from .models import ProtocolKind, ProviderDescriptor


class UnknownAdapterError(CatalogConfigError):
    """Raised when no adapter can be resolved or built for a descriptor.

    Failure modes include:
    - The protocol kind is not registered in the factory mapping.
    - The adapter module cannot be imported or the class is missing.
    - The adapter constructor rejected the descriptor.
    """


class AdapterFactory:
    """Create protocol adapters for provider descriptors."""

    # Map protocol kinds to import paths and class names
    _ADAPTERS: Dict[ProtocolKind, Dict[str, str]] = {
        ProtocolKind.OPENAI_COMPATIBLE: {
            "module": "inference_gateway.openai.adapter",
            "class": "OpenAICompatibleAdapter",
        },
        ProtocolKind.GEMINI: {"module": "inference_gateway.gemini.adapter", "class": "GeminiAdapter"},
        ProtocolKind.SANDBOXED_EXEC: {"module": "inference_gateway.sandbox.adapter", "class": "SandboxExecAdapter"},
    }

    @classmethod
    def adapter_class(cls, kind: ProtocolKind) -> Type:
        spec = cls._ADAPTERS.get(kind)
        if not spec:
            raise UnknownAdapterError(f"No adapter registered for protocol kind '{kind}'")
        module_path, class_name = spec["module"], spec["class"]
        try:
            mod = import_module(module_path)
        except ImportError as exc:  # pragma: no cover - import failure path
            raise UnknownAdapterError(f"Failed to import module '{module_path}' for '{kind.value}': {exc}") from exc
        try:
            return getattr(mod, class_name)
        except AttributeError as exc:
            raise UnknownAdapterError(f"Adapter class '{class_name}' not found in '{module_path}'") from exc

    @classmethod
    def create(cls, descriptor: ProviderDescriptor, **kwargs: Any) -> Any:
        """Build the adapter bound to ``descriptor``.

        ``kwargs`` are forwarded to the adapter constructor (for example an
        injected ``client_getter`` in tests).
        """
        klass = cls.adapter_class(descriptor.protocol_kind)
        try:
            return klass(descriptor, **kwargs)
        except TypeError as exc:
            raise UnknownAdapterError(
                f"Invalid arguments for '{descriptor.protocol_kind.value}' adapter of '{descriptor.id}': {exc}"
            ) from exc

    @classmethod
    def supported(cls) -> Tuple[ProtocolKind, ...]:
        return tuple(cls._ADAPTERS.keys())


__all__ = ["AdapterFactory", "UnknownAdapterError"]
