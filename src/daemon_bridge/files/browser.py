"""File browsing through a server's daemon.

Operations combine the path normalizer with one daemon call each:
- list_directory: GET  /server/directory/{path}
- read_file:      GET  /server/file/{path}
- save_file:      POST /server/file/{path}  {"contents": ...}

Daemon-side failures become FileOperationError; transport failures
propagate as DaemonConnectionError. Nothing is retried and nothing is
cached. A save that times out after the daemon wrote the file still
surfaces as an error.
"""

from __future__ import annotations

__all__ = [
    "DIRECTORY_ERROR_MESSAGE",
    "READ_ERROR_MESSAGE",
    "SAVE_ERROR_MESSAGE",
    "FileBrowser",
]

from typing import Any

import httpx
from pydantic import ValidationError

from daemon_bridge.constants import DAEMON_DIRECTORY_ENDPOINT, DAEMON_FILE_ENDPOINT, DEFAULT_DAEMON_TIMEOUT_SECONDS
from daemon_bridge.daemon.client import open_daemon_client
from daemon_bridge.daemon.models import DaemonErrorBody, DirectoryListing, FileContents, FileEntry
from daemon_bridge.exceptions import FileOperationError
from daemon_bridge.files.paths import PathSpec, normalize, normalize_file_path
from daemon_bridge.nodes.resolver import NodeResolver
from daemon_bridge.telemetry.system_logger import get_system_logger

DIRECTORY_ERROR_MESSAGE = "An error occurred while attempting to load the requested directory, please try again."
READ_ERROR_MESSAGE = "An error occurred while attempting to open that file, please try again."
SAVE_ERROR_MESSAGE = "An error occurred while attempting to save that file, please try again."

_logger = get_system_logger()


def _daemon_failure(response: httpx.Response, fallback: str, server_id: str, operation: str) -> FileOperationError:
    """Build a FileOperationError from a failed daemon response."""
    detail: str | None = None
    try:
        detail = DaemonErrorBody.model_validate(response.json()).detail
    except (ValueError, ValidationError):
        detail = None

    _logger.warning(
        {
            "event": "daemon_file_operation_failed",
            "message": f"Daemon rejected {operation} for server '{server_id}' (HTTP {response.status_code})",
            "server_id": server_id,
            "operation": operation,
            "status_code": response.status_code,
            "daemon_detail": detail,
        }
    )
    return FileOperationError(detail or fallback, status_code=response.status_code, detail=detail)


def _decode_listing(body: Any) -> DirectoryListing:
    if isinstance(body, list):
        return DirectoryListing.from_entries([FileEntry.model_validate(entry) for entry in body])
    return DirectoryListing.model_validate(body)


class FileBrowser:
    """Directory listing and file read/write for servers."""

    def __init__(
        self,
        resolver: NodeResolver,
        *,
        timeout: float = DEFAULT_DAEMON_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._resolver = resolver
        self._timeout = timeout
        self._transport = transport

    async def _request(
        self,
        server_id: str,
        method: str,
        path: str,
        *,
        json: Any = None,
    ) -> httpx.Response:
        connection = self._resolver.resolve(server_id)
        async with open_daemon_client(
            connection,
            server_id=server_id,
            timeout=self._timeout,
            transport=self._transport,
        ) as client:
            return await client.send(method, path, json=json)

    async def list_directory(self, server_id: str, raw_path: str | PathSpec | None) -> DirectoryListing:
        """List a directory of a server.

        Args:
            server_id: Server identity.
            raw_path: Directory as supplied by the caller, or an already normalized PathSpec.

        Returns:
            Files and folders in daemon order.

        Raises:
            NotFoundError: Unknown server.
            InvalidPathError: Path escapes the root or is malformed.
            DaemonConnectionError: Daemon unreachable.
            FileOperationError: Daemon reported a failure or sent an unusable body.
        """
        directory = normalize(raw_path)
        response = await self._request(
            server_id, "GET", f"{DAEMON_DIRECTORY_ENDPOINT}/{directory.url_path()}"
        )

        if response.status_code != 200:
            raise _daemon_failure(response, DIRECTORY_ERROR_MESSAGE, server_id, "list_directory")

        try:
            listing = _decode_listing(response.json())
        except (ValueError, ValidationError) as e:
            _logger.warning(
                {
                    "event": "daemon_listing_malformed",
                    "message": f"Malformed directory listing for server '{server_id}'",
                    "server_id": server_id,
                    "directory": str(directory),
                    "error_type": type(e).__name__,
                }
            )
            raise FileOperationError(DIRECTORY_ERROR_MESSAGE, status_code=response.status_code) from e

        return listing

    async def read_file(self, server_id: str, file_path: str) -> FileContents:
        """Read a text file of a server.

        Raises:
            NotFoundError: Unknown server.
            InvalidPathError: Path escapes the root, is malformed or names the root.
            DaemonConnectionError: Daemon unreachable.
            FileOperationError: Daemon reported a failure or sent an unusable body.
        """
        path = normalize_file_path(file_path)
        response = await self._request(server_id, "GET", f"{DAEMON_FILE_ENDPOINT}/{path.url_path()}")

        if response.status_code != 200:
            raise _daemon_failure(response, READ_ERROR_MESSAGE, server_id, "read_file")

        try:
            body = response.json()
            contents = body["contents"] if isinstance(body, dict) else None
            return FileContents(path=str(path), contents=contents)
        except (ValueError, KeyError, ValidationError) as e:
            raise FileOperationError(READ_ERROR_MESSAGE, status_code=response.status_code) from e

    async def save_file(self, server_id: str, file_path: str, contents: str) -> None:
        """Write a file of a server.

        The path goes through the same traversal rejection as listings
        before anything is sent. Succeeds only on a 2xx daemon response.

        Raises:
            NotFoundError: Unknown server.
            InvalidPathError: Path escapes the root, is malformed or names the root.
            DaemonConnectionError: Daemon unreachable (the write may still have happened).
            FileOperationError: Daemon reported a failure.
        """
        path = normalize_file_path(file_path)
        response = await self._request(
            server_id,
            "POST",
            f"{DAEMON_FILE_ENDPOINT}/{path.url_path()}",
            json={"contents": contents},
        )

        if not response.is_success:
            raise _daemon_failure(response, SAVE_ERROR_MESSAGE, server_id, "save_file")

        _logger.info(
            {
                "event": "file_saved",
                "message": f"Saved {path} on server '{server_id}'",
                "server_id": server_id,
                "path": str(path),
                "bytes": len(contents.encode("utf-8")),
            }
        )
