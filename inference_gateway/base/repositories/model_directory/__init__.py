"""Model directory: TTL-cached provider model listings."""

from .directory import DEFAULT_TTL, Clock, ModelDirectory, utc_now
from .discovery import fetch_models
from .parsing import parse_model_ids
from .store import InMemoryModelDirectoryStore

__all__ = [
    "ModelDirectory",
    "InMemoryModelDirectoryStore",
    "fetch_models",
    "parse_model_ids",
    "Clock",
    "DEFAULT_TTL",
    "utc_now",
]
