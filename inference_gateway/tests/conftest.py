"""Pytest configuration for the gateway test suite.

Isolates every test from the developer's environment: provider credentials
and gateway overrides are removed, ``.env`` loading is pointed at a missing
file, and timeout/client caches are reset.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Iterator, List

import pytest

from inference_gateway import config as config_mod
from inference_gateway.base import timeouts
from inference_gateway.base.http import client as http_client_mod
from inference_gateway.base.logging import get_logger

_ENV_PREFIXES = ("GATEWAY_", "GW_TIMEOUT_")


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Strip gateway env vars and disable ``.env`` loading for each test."""
    for name in list(os.environ):
        if name.startswith(_ENV_PREFIXES):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "missing.env"))
    monkeypatch.setattr(config_mod, "_DOTENV_LOADED", False)
    monkeypatch.setattr(timeouts, "_CACHED", None)
    monkeypatch.setattr(timeouts, "_ENV_GUARD", None)
    yield
    http_client_mod._CLIENTS.clear()


@pytest.fixture(autouse=True)
def isolated_gateway_logger() -> Iterator[None]:
    """Restore the ``gateway`` logger's handlers and level after each test."""
    logger = get_logger()
    handlers = list(logger.handlers)
    level = logger.level
    yield
    for h in list(logger.handlers):
        if h not in handlers:
            logger.removeHandler(h)
    for h in handlers:
        if h not in logger.handlers:
            logger.addHandler(h)
    logger.setLevel(level)


@pytest.fixture()
def gateway_events(caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch):
    """Capture structured events from the ``gateway`` logger tree.

    Returns a callable producing the decoded JSON payloads logged so far.
    """
    monkeypatch.setenv("GATEWAY_LOG_LEVEL", "DEBUG")
    logger = get_logger()
    logger.addHandler(caplog.handler)
    caplog.handler.setLevel(logging.DEBUG)

    def events() -> List[Dict[str, Any]]:
        out = []
        for record in caplog.records:
            try:
                payload = json.loads(record.getMessage())
            except ValueError:
                continue
            if isinstance(payload, dict):
                out.append(payload)
        return out

    try:
        yield events
    finally:
        logger.removeHandler(caplog.handler)
