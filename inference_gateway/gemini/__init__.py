"""Gemini protocol adapter."""

from .adapter import GeminiAdapter

__all__ = ["GeminiAdapter"]
