"""Composition root for the gateway."""

from .container import GatewayContainer, build_container

__all__ = ["GatewayContainer", "build_container"]
