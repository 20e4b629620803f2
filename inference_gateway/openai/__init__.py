"""openai-compatible protocol adapter."""

from .adapter import OpenAICompatibleAdapter

__all__ = ["OpenAICompatibleAdapter"]
