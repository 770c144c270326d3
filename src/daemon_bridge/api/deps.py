"""Shared dependencies for API routes.

Usage with Annotated:
    from daemon_bridge.api.deps import AuthorizerDep, BridgeDep

    @router.get("/{server_id}/status")
    async def get_status(server_id: str, bridge: BridgeDep) -> StatusResponse:
        ...
"""

from __future__ import annotations

__all__ = [
    "AuthorizerDep",
    "BridgeDep",
    "get_authorizer",
    "get_bridge",
    "require_ability",
]

from typing import Annotated

from fastapi import Depends, HTTPException, Request

from daemon_bridge.api.authorization import Ability, AllowAllAuthorizer, Authorizer
from daemon_bridge.api.errors import APIError, ErrorCode
from daemon_bridge.bridge import DaemonBridge
from daemon_bridge.telemetry.system_logger import get_system_logger

_logger = get_system_logger()


def get_bridge(request: Request) -> DaemonBridge:
    """Get DaemonBridge from app.state.

    Raises HTTPException 503 if not available.
    """
    bridge = getattr(request.app.state, "bridge", None)
    if bridge is None:
        raise HTTPException(status_code=503, detail="Bridge not configured.")
    return bridge


def get_authorizer(request: Request) -> Authorizer:
    """Get the Authorizer from app.state (allow-all when unset)."""
    authorizer = getattr(request.app.state, "authorizer", None)
    return authorizer or AllowAllAuthorizer()


BridgeDep = Annotated[DaemonBridge, Depends(get_bridge)]
AuthorizerDep = Annotated[Authorizer, Depends(get_authorizer)]


async def require_ability(
    request: Request,
    authorizer: Authorizer,
    ability: Ability,
    target: str,
) -> None:
    """Refuse the request with 403 unless the authorizer allows it.

    Raises:
        APIError: 403 AUTH_FORBIDDEN when refused.
    """
    if await authorizer.authorize(request, ability, target):
        return

    _logger.warning(
        {
            "event": "capability_denied",
            "message": f"Denied {ability.value} on '{target}'",
            "ability": ability.value,
            "target": target,
            "path": request.url.path,
        }
    )
    raise APIError(403, ErrorCode.AUTH_FORBIDDEN, "You do not have permission to perform this action.")
