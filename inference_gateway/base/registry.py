"""Provider Registry.

Holds the immutable set of provider descriptors loaded from the static
catalog, plus one adapter per descriptor. The registry is populated once at
startup and never mutated afterwards, so concurrent reads need no locking.

Failure semantics
-----------------
- Loading fails fast with :class:`CatalogConfigError` when the catalog is
  missing, malformed, or lacks a field its protocol kind requires.
- :meth:`ProviderRegistry.lookup` raises :class:`ProviderNotFoundError` for
  unknown ids.
"""

from __future__ import annotations

from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Tuple, Union

from pydantic import ValidationError

from .dto.catalog import CatalogDTO
from .errors import CatalogConfigError, ProviderNotFoundError
from .factory import AdapterFactory
from .interfaces import ProtocolAdapter
from .logging import get_logger, log_event
from .models import ProviderDescriptor

AdapterBuilder = Callable[[ProviderDescriptor], ProtocolAdapter]


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts)


class ProviderRegistry:
    """Read-only provider lookup in catalog declaration order."""

    def __init__(
        self,
        descriptors: Iterable[ProviderDescriptor],
        *,
        adapter_builder: Optional[AdapterBuilder] = None,
    ) -> None:
        ordered: Dict[str, ProviderDescriptor] = {}
        for d in descriptors:
            if d.id in ordered:
                raise CatalogConfigError(f"Invalid provider catalog: duplicate provider id '{d.id}'")
            ordered[d.id] = d
        if not ordered:
            raise CatalogConfigError("Invalid provider catalog: no providers declared")
        build = adapter_builder or AdapterFactory.create
        self._descriptors: Mapping[str, ProviderDescriptor] = MappingProxyType(ordered)
        self._adapters: Mapping[str, ProtocolAdapter] = MappingProxyType({pid: build(d) for pid, d in ordered.items()})

    # ---- construction ------------------------------------------------------
    @classmethod
    def from_mapping(cls, document: Mapping[str, Any], **kwargs: Any) -> "ProviderRegistry":
        """Build a registry from an already-parsed catalog document."""
        if not isinstance(document, Mapping):
            raise CatalogConfigError("Invalid provider catalog: top level must be a mapping")
        try:
            catalog = CatalogDTO.model_validate(dict(document))
        except ValidationError as exc:
            raise CatalogConfigError(f"Invalid provider catalog: {_format_validation_error(exc)}") from exc
        registry = cls((entry.to_descriptor() for entry in catalog.providers), **kwargs)
        log_event(
            get_logger("gateway.registry"),
            "registry.loaded",
            providers=list(registry.ids()),
        )
        return registry

    @classmethod
    def from_catalog(cls, path: Optional[Union[str, Path]] = None, **kwargs: Any) -> "ProviderRegistry":
        """Load the catalog file (see ``inference_gateway.config.catalog_path``)."""
        from ..config import load_catalog_document

        return cls.from_mapping(load_catalog_document(path), **kwargs)

    # ---- queries -----------------------------------------------------------
    def lookup(self, provider_id: str) -> ProviderDescriptor:
        try:
            return self._descriptors[provider_id]
        except KeyError:
            raise ProviderNotFoundError(provider_id) from None

    def adapter_for(self, provider_id: str) -> ProtocolAdapter:
        self.lookup(provider_id)
        return self._adapters[provider_id]

    def __contains__(self, provider_id: object) -> bool:
        return provider_id in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)

    def ids(self) -> Tuple[str, ...]:
        return tuple(self._descriptors)

    def descriptors(self) -> Tuple[ProviderDescriptor, ...]:
        """Return all descriptors in declaration order."""
        return tuple(self._descriptors.values())

    def streaming_descriptors(self) -> Tuple[ProviderDescriptor, ...]:
        """Descriptors whose protocol streams over HTTP (fallback candidates)."""
        return tuple(d for d in self._descriptors.values() if d.protocol_kind.is_http_streaming)


__all__ = ["ProviderRegistry", "AdapterBuilder"]
