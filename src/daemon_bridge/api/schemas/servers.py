"""Request/response schemas for server endpoints."""

from __future__ import annotations

__all__ = [
    "DirectoryRequest",
    "DirectoryResponse",
    "FileContentsResponse",
    "SaveFileRequest",
    "StatusResponse",
]

from pydantic import BaseModel, Field

from daemon_bridge.daemon.models import FileEntry
from daemon_bridge.files.paths import Breadcrumb


class StatusResponse(BaseModel):
    """Power status of a server."""

    running: bool = Field(description="True only if the daemon confirmed the process is running")


class DirectoryRequest(BaseModel):
    """Directory to list (may be percent-encoded)."""

    directory: str = Field(default="/", description="Directory below the server root")


class DirectoryResponse(BaseModel):
    """Directory listing with navigation metadata.

    Attributes:
        files: Files in daemon order.
        folders: Folders in daemon order.
        directory: Breadcrumb for the listed directory.
        editable_extensions: Extensions the panel may open in its editor.
    """

    files: list[FileEntry]
    folders: list[FileEntry]
    directory: Breadcrumb
    editable_extensions: list[str]


class FileContentsResponse(BaseModel):
    """Contents of one file."""

    path: str
    contents: str


class SaveFileRequest(BaseModel):
    """File to write and its new contents."""

    file: str = Field(min_length=1, description="File path below the server root")
    contents: str = Field(description="Full new file contents")
