"""Resilience helpers: provider fallback orchestration."""

from .fallback import ChatOutcome, FallbackOrchestrator

__all__ = ["ChatOutcome", "FallbackOrchestrator"]
