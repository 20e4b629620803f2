"""inference_gateway.config.env
=============================

Credential Resolver: maps a provider descriptor to the secret it should use.

Purpose
-------
- A descriptor names a canonical environment variable (``credential_ref``)
  and optional aliases (``credential_aliases``). The resolver returns the
  first usable value in that order, or ``None`` when nothing usable is set.
- Placeholder values copied from sample env files count as absent.

Failure Modes
-------------
- Never raises. ``None`` means Absent and callers decide what that implies
  (401 for the requested provider, skip for fallback candidates).
- Secrets are never logged here.
"""

from __future__ import annotations

import os
from typing import Mapping, Optional, Tuple

from ..base.models import ProviderDescriptor


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the provided string looks like a placeholder value.

    Heuristics: contains 'placeholder', 'changeme' or 'example'. The check is
    case-insensitive and resilient to surrounding spaces.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return "placeholder" in v or "changeme" in v or "example" in v


class CredentialResolver:
    """Resolve provider credentials from an environment mapping.

    Parameters
    ----------
    environ:
        Mapping to read from. Defaults to ``os.environ`` read at call time,
        so values loaded from ``.env`` after construction are visible.
    """

    def __init__(self, environ: Optional[Mapping[str, str]] = None) -> None:
        self._environ = environ

    def _env(self) -> Mapping[str, str]:
        return os.environ if self._environ is None else self._environ

    def resolve_with_source(self, descriptor: ProviderDescriptor) -> Tuple[Optional[str], Optional[str]]:
        """Return ``(value, env_var_used)`` or ``(None, None)``."""
        env = self._env()
        for name in descriptor.credential_refs():
            raw = env.get(name)
            if raw is None:
                continue
            value = raw.strip()
            if value and not is_placeholder(value):
                return value, name
        return None, None

    def resolve(self, descriptor: ProviderDescriptor) -> Optional[str]:
        """Return the credential for ``descriptor`` or ``None`` (Absent)."""
        value, _ = self.resolve_with_source(descriptor)
        return value

    def has_credential(self, descriptor: ProviderDescriptor) -> bool:
        return self.resolve(descriptor) is not None


__all__ = ["is_placeholder", "CredentialResolver"]
