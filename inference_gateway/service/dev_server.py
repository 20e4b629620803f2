from __future__ import annotations

import uvicorn

from inference_gateway.config import get_settings


def main() -> None:
    """Start the development server for the gateway FastAPI app.

    Host, port and reload behavior come from the environment:

    - GATEWAY_HOST: interface to bind (default "127.0.0.1")
    - GATEWAY_PORT: port to bind (default 8000)
    - GATEWAY_RELOAD: "true"/"false" to toggle auto-reload (default false)
    """
    settings = get_settings()
    uvicorn.run(
        "inference_gateway.service.app:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
    )


if __name__ == "__main__":
    main()
