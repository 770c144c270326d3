"""FastAPI application exposing the bridge to panel request handlers.

Routes:
- /api/servers/{server_id}/status     Power status (never an error)
- /api/servers/{server_id}/directory  Directory listing + breadcrumb
- /api/servers/{server_id}/file       Read (GET) and save (POST) files
- /api/nodes/{node_name}/system       Daemon system information

Security:
- Bearer token for /api/* (config api.token); disabled when None
- Injectable Authorizer for per-operation capability checks

Usage:
    daemon-bridge serve
"""

from __future__ import annotations

__all__ = ["create_app"]

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from daemon_bridge import __version__
from daemon_bridge.bridge import DaemonBridge

from .authorization import AllowAllAuthorizer, Authorizer
from .errors import (
    APIError,
    api_error_handler,
    http_exception_handler,
    unhandled_exception_handler,
    validation_error_handler,
)
from .routes import nodes, servers
from .security import SecurityMiddleware


def create_app(
    bridge: DaemonBridge,
    *,
    token: str | None = None,
    authorizer: Authorizer | None = None,
) -> FastAPI:
    """Create the FastAPI application.

    Args:
        bridge: Bridge used by every route.
        token: Bearer token panel handlers must present. None disables auth.
        authorizer: Capability checker. Defaults to allow-all.

    Returns:
        Configured FastAPI application.
    """
    app = FastAPI(
        title="daemon-bridge",
        description="Authenticated proxy between the panel and node daemons",
        version=__version__,
        docs_url=None,
        redoc_url=None,
    )

    app.state.bridge = bridge
    app.state.authorizer = authorizer or AllowAllAuthorizer()

    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.add_middleware(SecurityMiddleware, token=token)

    app.include_router(servers.router, prefix="/api/servers", tags=["servers"])
    app.include_router(nodes.router, prefix="/api/nodes", tags=["nodes"])

    return app
