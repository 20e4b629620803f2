"""Parsing helpers for provider model listings.

Listings come in a few loose shapes:

- openai-compatible: ``{"data": [{"id": "gpt-4o"}, ...]}``
- gemini: ``{"models": [{"name": "models/gemini-1.5-pro"}, ...]}``
- a plain list of ids or objects

Each helper tolerates missing keys; a payload that yields no ids at all is
reported as malformed by the caller.
"""

from __future__ import annotations

from typing import Any, List, Optional, Tuple

_GEMINI_NAME_PREFIX = "models/"


def extract_raw_entries(data: Any) -> List[Any]:
    """Return the list of raw model entries from a listing payload."""
    if isinstance(data, dict):
        for key in ("data", "models"):
            if isinstance(data.get(key), list):
                return data[key]
        return []
    if isinstance(data, list):
        return data
    return []


def entry_id(item: Any) -> Optional[str]:
    """Pick the model identifier from a flexible entry, or ``None``."""
    if isinstance(item, str):
        value = item
    elif isinstance(item, dict):
        value = item.get("id") or item.get("name") or item.get("model")
    else:
        return None
    if not isinstance(value, str) or not value.strip():
        return None
    value = value.strip()
    if value.startswith(_GEMINI_NAME_PREFIX):
        value = value[len(_GEMINI_NAME_PREFIX):]
    return value


def parse_model_ids(data: Any) -> Tuple[str, ...]:
    """Return de-duplicated model ids in listing order."""
    ids = (entry_id(item) for item in extract_raw_entries(data))
    return tuple(dict.fromkeys(i for i in ids if i))


__all__ = ["extract_raw_entries", "entry_id", "parse_model_ids"]
