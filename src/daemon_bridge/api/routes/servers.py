"""Server API endpoints: power status and file browsing.

Routes mounted at: /api/servers
"""

from __future__ import annotations

__all__ = ["router"]

from fastapi import APIRouter, Query, Request, Response

from daemon_bridge.api.authorization import Ability
from daemon_bridge.api.deps import AuthorizerDep, BridgeDep, require_ability
from daemon_bridge.api.errors import translate_bridge_error
from daemon_bridge.api.schemas import (
    DirectoryRequest,
    DirectoryResponse,
    ErrorResponse,
    FileContentsResponse,
    SaveFileRequest,
    StatusResponse,
)
from daemon_bridge.constants import EDITABLE_EXTENSIONS
from daemon_bridge.exceptions import DaemonBridgeError
from daemon_bridge.files.browser import DIRECTORY_ERROR_MESSAGE, READ_ERROR_MESSAGE, SAVE_ERROR_MESSAGE
from daemon_bridge.files.paths import breadcrumb, normalize

router = APIRouter()

_ERROR_RESPONSES: dict[int | str, dict[str, object]] = {
    400: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
}


@router.get("/{server_id}/status", response_model=StatusResponse)
async def get_status(
    server_id: str,
    request: Request,
    bridge: BridgeDep,
    authorizer: AuthorizerDep,
) -> StatusResponse:
    """Report whether the server process is running.

    Always 200: daemon problems read as not running.
    """
    await require_ability(request, authorizer, Ability.VIEW_STATUS, server_id)
    return StatusResponse(running=await bridge.check_status(server_id))


@router.post("/{server_id}/directory", response_model=DirectoryResponse, responses=_ERROR_RESPONSES)
async def list_directory(
    server_id: str,
    body: DirectoryRequest,
    request: Request,
    bridge: BridgeDep,
    authorizer: AuthorizerDep,
) -> DirectoryResponse:
    """List a directory of the server."""
    await require_ability(request, authorizer, Ability.LIST_FILES, server_id)

    try:
        directory = normalize(body.directory)
        listing = await bridge.list_directory(server_id, directory)
    except DaemonBridgeError as e:
        raise translate_bridge_error(e, DIRECTORY_ERROR_MESSAGE, server_id=server_id) from e

    return DirectoryResponse(
        files=listing.files,
        folders=listing.folders,
        directory=breadcrumb(directory),
        editable_extensions=list(EDITABLE_EXTENSIONS),
    )


@router.get("/{server_id}/file", response_model=FileContentsResponse, responses=_ERROR_RESPONSES)
async def read_file(
    server_id: str,
    request: Request,
    bridge: BridgeDep,
    authorizer: AuthorizerDep,
    path: str = Query(min_length=1, description="File path below the server root"),
) -> FileContentsResponse:
    """Return the contents of a file."""
    await require_ability(request, authorizer, Ability.READ_FILES, server_id)

    try:
        result = await bridge.read_file(server_id, path)
    except DaemonBridgeError as e:
        raise translate_bridge_error(e, READ_ERROR_MESSAGE, server_id=server_id) from e

    return FileContentsResponse(path=result.path, contents=result.contents)


@router.post("/{server_id}/file", status_code=204, responses=_ERROR_RESPONSES)
async def save_file(
    server_id: str,
    body: SaveFileRequest,
    request: Request,
    bridge: BridgeDep,
    authorizer: AuthorizerDep,
) -> Response:
    """Overwrite a file with new contents."""
    await require_ability(request, authorizer, Ability.SAVE_FILES, server_id)

    try:
        await bridge.save_file(server_id, body.file, body.contents)
    except DaemonBridgeError as e:
        raise translate_bridge_error(e, SAVE_ERROR_MESSAGE, server_id=server_id) from e

    return Response(status_code=204)
