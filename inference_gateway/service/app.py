from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

from inference_gateway import __version__
from inference_gateway.base.constants import SERVED_BY_HEADER
from inference_gateway.base.http import close_all_clients
from inference_gateway.di.container import GatewayContainer, build_container

from .app_parts.app_core import (
    build_models_response,
    build_providers_response,
    get_container,
    handle_chat,
)


def create_app(container: Optional[GatewayContainer] = None) -> FastAPI:
    """Build the gateway application around ``container``.

    The provider catalog is loaded during startup so a malformed catalog stops
    the service before it accepts traffic. Pooled upstream clients are closed
    on shutdown.
    """
    container = container or build_container()

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        container.registry()
        try:
            yield
        finally:
            await close_all_clients()

    app = FastAPI(title="Inference Gateway", version=__version__, lifespan=lifespan)
    app.state.container = container

    # -----------------------------------------------------------------------
    # CORS configuration
    # -----------------------------------------------------------------------

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(container.settings().cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[SERVED_BY_HEADER],
    )

    # -----------------------------------------------------------------------
    # Health endpoint
    # -----------------------------------------------------------------------

    @app.get("/api/health")
    def health() -> Dict[str, Any]:
        """Report that the service is running."""
        return {"ok": True}

    # -----------------------------------------------------------------------
    # Providers and models endpoints
    # -----------------------------------------------------------------------

    @app.get("/api/providers")
    def get_providers(c: GatewayContainer = Depends(get_container)) -> Dict[str, Any]:
        """List catalog providers and whether each has a usable credential."""
        return build_providers_response(c)

    @app.get("/api/models")
    async def get_models(provider: Optional[str] = None, c: GatewayContainer = Depends(get_container)) -> Response:
        """Return the model ids a provider currently offers.

        Served from the model directory cache when fresh; otherwise the
        provider is asked, falling back to its catalog defaults.
        """
        return await build_models_response(provider, c)

    # -----------------------------------------------------------------------
    # Chat endpoint
    # -----------------------------------------------------------------------

    @app.post("/api/chat")
    async def post_chat(request: Request, c: GatewayContainer = Depends(get_container)) -> Response:
        """Stream a chat completion, falling back across providers.

        Returns a ``text/plain`` stream of generated text for HTTP providers,
        JSON ``{"result"}`` for the sandbox provider, or a plain-text error
        with status 400/401/404/500/503.
        """
        return await handle_chat(request, c)

    return app


app = create_app()


def get_app() -> FastAPI:
    """Return the module-level FastAPI application instance."""
    return app
