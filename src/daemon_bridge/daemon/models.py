"""Pydantic models for daemon payloads.

The daemon owns these schemas, so models are permissive: only the fields
the bridge relies on are declared, everything else passes through.
"""

from __future__ import annotations

__all__ = [
    "DaemonErrorBody",
    "DirectoryListing",
    "FileContents",
    "FileEntry",
    "ServerStatusPayload",
]

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt


class FileEntry(BaseModel):
    """A single file or folder reported by the daemon.

    Attributes:
        name: Entry name (no directory part).
        size: Size as reported (bytes, or a formatted string on some daemons).
        date: Last-modified timestamp as sent by the daemon.
        directory: Type tag used by daemons that send a flat entry list.

    Other daemon metadata (mime type, permissions, ...) is kept as extra fields.
    """

    model_config = ConfigDict(extra="allow")

    name: str
    size: int | str | None = None
    date: Any = None
    directory: bool | None = None


class DirectoryListing(BaseModel):
    """Contents of one directory, in daemon order."""

    files: list[FileEntry]
    folders: list[FileEntry]

    @classmethod
    def from_entries(cls, entries: list[FileEntry]) -> "DirectoryListing":
        """Partition a flat, type-tagged entry list into files and folders."""
        return cls(
            files=[entry for entry in entries if not entry.directory],
            folders=[entry for entry in entries if entry.directory],
        )


class FileContents(BaseModel):
    """A file read through the daemon."""

    path: str
    contents: str


class ServerStatusPayload(BaseModel):
    """Body of GET /server. status 1 means the process is running."""

    model_config = ConfigDict(extra="allow")

    status: StrictInt | None = None


class DaemonErrorBody(BaseModel):
    """Error body some daemons send alongside a failure status."""

    model_config = ConfigDict(extra="allow")

    error: str | None = Field(default=None)
    message: str | None = Field(default=None)

    @property
    def detail(self) -> str | None:
        return self.error or self.message
