"""
Pydantic DTOs for the static provider catalog.

The catalog is a mapping with a ``providers`` list. Entries use snake_case
keys; the camelCase spelling of each key is accepted as well. Validation
enforces the per-protocol required fields so a malformed catalog is
rejected at startup instead of at request time.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator

from ..constants import SANDBOX_MODEL_ID
from ..models import ProtocolKind, ProviderDescriptor, SandboxLimits


def _alias(snake: str, camel: str) -> AliasChoices:
    return AliasChoices(snake, camel)


class SandboxLimitsDTO(BaseModel):
    model_config = ConfigDict(extra="ignore")

    timeout_ms: int = Field(gt=0, validation_alias=_alias("timeout_ms", "timeoutMs"))
    memory_limit: str = Field(min_length=1, validation_alias=_alias("memory_limit", "memoryLimit"))


class ProviderEntryDTO(BaseModel):
    """One provider entry of the catalog.

    Required fields per protocol kind:
        - every kind: ``id``, ``protocol_kind``
        - ``openai-compatible`` / ``gemini``: ``base_endpoint``
        - ``sandboxed-exec``: ``base_endpoint`` and ``sandbox_limits``
    """

    model_config = ConfigDict(extra="ignore")

    id: str = Field(min_length=1)
    display_name: Optional[str] = Field(default=None, validation_alias=_alias("display_name", "displayName"))
    protocol_kind: ProtocolKind = Field(validation_alias=_alias("protocol_kind", "protocolKind"))
    base_endpoint: Optional[str] = Field(default=None, validation_alias=_alias("base_endpoint", "baseEndpoint"))
    credential_ref: Optional[str] = Field(default=None, validation_alias=_alias("credential_ref", "credentialRef"))
    credential_aliases: List[str] = Field(
        default_factory=list, validation_alias=_alias("credential_aliases", "credentialAliases")
    )
    discovery_path: Optional[str] = Field(default=None, validation_alias=_alias("discovery_path", "discoveryPath"))
    default_models: List[str] = Field(default_factory=list, validation_alias=_alias("default_models", "defaultModels"))
    sandbox_limits: Optional[SandboxLimitsDTO] = Field(
        default=None, validation_alias=_alias("sandbox_limits", "sandboxLimits")
    )

    @model_validator(mode="after")
    def _required_per_kind(self) -> "ProviderEntryDTO":
        if not (self.base_endpoint or "").strip():
            raise ValueError(f"provider '{self.id}' ({self.protocol_kind.value}) requires base_endpoint")
        if self.protocol_kind is ProtocolKind.SANDBOXED_EXEC and self.sandbox_limits is None:
            raise ValueError(f"provider '{self.id}' (sandboxed-exec) requires sandbox_limits")
        return self

    def to_descriptor(self) -> ProviderDescriptor:
        limits = None
        if self.sandbox_limits is not None:
            limits = SandboxLimits(
                timeout_ms=self.sandbox_limits.timeout_ms,
                memory_limit=self.sandbox_limits.memory_limit,
            )
        models = tuple(self.default_models)
        if self.protocol_kind is ProtocolKind.SANDBOXED_EXEC:
            models = (SANDBOX_MODEL_ID,)
        return ProviderDescriptor(
            id=self.id,
            display_name=self.display_name or self.id,
            protocol_kind=self.protocol_kind,
            base_endpoint=(self.base_endpoint or "").rstrip("/"),
            credential_ref=self.credential_ref or None,
            credential_aliases=tuple(a for a in self.credential_aliases if a),
            discovery_path=self.discovery_path or None,
            default_models=models,
            sandbox_limits=limits,
        )


class CatalogDTO(BaseModel):
    """Whole catalog document: a non-empty list of uniquely named providers."""

    model_config = ConfigDict(extra="ignore")

    providers: List[ProviderEntryDTO] = Field(min_length=1)

    @model_validator(mode="after")
    def _unique_ids(self) -> "CatalogDTO":
        seen = set()
        for entry in self.providers:
            if entry.id in seen:
                raise ValueError(f"duplicate provider id '{entry.id}'")
            seen.add(entry.id)
        return self


__all__ = ["SandboxLimitsDTO", "ProviderEntryDTO", "CatalogDTO"]
