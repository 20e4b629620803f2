"""DTO validation package for the gateway."""

from .chat import ChatBodyDTO, MessageDTO
from .catalog import CatalogDTO, ProviderEntryDTO, SandboxLimitsDTO

__all__ = [
    "MessageDTO",
    "ChatBodyDTO",
    "SandboxLimitsDTO",
    "ProviderEntryDTO",
    "CatalogDTO",
]
