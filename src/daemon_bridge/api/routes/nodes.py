"""Node API endpoints.

Routes mounted at: /api/nodes
"""

from __future__ import annotations

__all__ = ["router"]

from typing import Any

from fastapi import APIRouter, Request

from daemon_bridge.api.authorization import Ability
from daemon_bridge.api.deps import AuthorizerDep, BridgeDep, require_ability
from daemon_bridge.api.errors import translate_bridge_error
from daemon_bridge.api.schemas import ErrorResponse
from daemon_bridge.exceptions import DaemonBridgeError

SYSTEM_INFO_ERROR_MESSAGE = "Unable to retrieve system information from this node, please try again."

router = APIRouter()


@router.get(
    "/{node_name}/system",
    responses={404: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def get_node_system(
    node_name: str,
    request: Request,
    bridge: BridgeDep,
    authorizer: AuthorizerDep,
) -> dict[str, Any]:
    """Return the daemon's system information for a node, as sent by the daemon."""
    await require_ability(request, authorizer, Ability.VIEW_NODE, node_name)

    try:
        return await bridge.get_node_system_info_by_name(node_name)
    except DaemonBridgeError as e:
        raise translate_bridge_error(e, SYSTEM_INFO_ERROR_MESSAGE, node=node_name) from e
