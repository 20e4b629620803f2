"""Base shared constants for the gateway.

Central location to avoid scattering magic strings across adapters and the
service boundary.
"""
from __future__ import annotations

# Literal payload that terminates an openai-compatible SSE stream.
SSE_DONE_SENTINEL = "[DONE]"

# Prefix of a server-sent-event data line.
SSE_DATA_PREFIX = "data:"

# Single model advertised by sandboxed-exec providers.
SANDBOX_MODEL_ID = "sandbox-js-executor"

# Fenced block recognised as executable input: optional javascript/js tag.
SANDBOX_CODE_PATTERN = r"```(?:javascript|js)?[ \t]*\r?\n([\s\S]+?)\r?\n```"

# User-facing boundary messages.
MISSING_FIELDS_MESSAGE = "Missing required fields"
PROVIDER_NOT_FOUND_MESSAGE = "Provider not found"
PROVIDER_REQUIRED_MESSAGE = "Provider ID required"
MISSING_API_KEY_MESSAGE = "API key not configured"  # pragma: allowlist secret - message text, not a secret
NO_EXECUTABLE_CODE_MESSAGE = "No executable code found"
INTERNAL_ERROR_MESSAGE = "Internal error"

# Response header naming the provider that served a stream.
SERVED_BY_HEADER = "X-Gateway-Provider"

__all__ = [
    "SSE_DONE_SENTINEL",
    "SSE_DATA_PREFIX",
    "SANDBOX_MODEL_ID",
    "SANDBOX_CODE_PATTERN",
    "MISSING_FIELDS_MESSAGE",
    "PROVIDER_NOT_FOUND_MESSAGE",
    "PROVIDER_REQUIRED_MESSAGE",
    "MISSING_API_KEY_MESSAGE",
    "NO_EXECUTABLE_CODE_MESSAGE",
    "INTERNAL_ERROR_MESSAGE",
    "SERVED_BY_HEADER",
]
