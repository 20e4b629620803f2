"""sandboxed-exec protocol adapter."""

from .adapter import SandboxExecAdapter, extract_code

__all__ = ["SandboxExecAdapter", "extract_code"]
