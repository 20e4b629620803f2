"""
Cached model listing for one provider.

Entries are superseded, never merged, when a provider's listing is
refreshed.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Tuple


@dataclass(frozen=True)
class ModelDirectoryEntry:
    """Model ids fetched from a provider's discovery endpoint.

    Attributes:
        provider_id: Provider the listing belongs to.
        models: Model identifiers in upstream order.
        fetched_at: Timezone-aware UTC timestamp of the successful fetch.
    """

    provider_id: str
    models: Tuple[str, ...]
    fetched_at: datetime

    def is_stale(self, now: datetime, ttl: timedelta) -> bool:
        return now - self.fetched_at > ttl


__all__ = ["ModelDirectoryEntry"]
