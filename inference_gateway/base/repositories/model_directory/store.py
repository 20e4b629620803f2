"""Process-wide store for model directory entries.

One entry per provider id; a write supersedes the previous entry instead of
merging with it. A single lock guards the dict. It is held only for the
dict operation itself, never across network I/O.
"""

from __future__ import annotations

import threading
from typing import Dict, Optional

from ...models import ModelDirectoryEntry


class InMemoryModelDirectoryStore:
    """Thread-safe mapping of provider id to :class:`ModelDirectoryEntry`."""

    def __init__(self) -> None:
        self._entries: Dict[str, ModelDirectoryEntry] = {}
        self._lock = threading.Lock()

    def get(self, provider_id: str) -> Optional[ModelDirectoryEntry]:
        with self._lock:
            return self._entries.get(provider_id)

    def put(self, entry: ModelDirectoryEntry) -> None:
        """Replace the entry for ``entry.provider_id`` (last write wins)."""
        with self._lock:
            self._entries[entry.provider_id] = entry

    def clear(self, provider_id: Optional[str] = None) -> None:
        with self._lock:
            if provider_id is None:
                self._entries.clear()
            else:
                self._entries.pop(provider_id, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


__all__ = ["InMemoryModelDirectoryStore"]
