"""API request/response schemas."""

from daemon_bridge.api.schemas.errors import ErrorDetail, ErrorResponse
from daemon_bridge.api.schemas.servers import (
    DirectoryRequest,
    DirectoryResponse,
    FileContentsResponse,
    SaveFileRequest,
    StatusResponse,
)

__all__ = [
    "DirectoryRequest",
    "DirectoryResponse",
    "ErrorDetail",
    "ErrorResponse",
    "FileContentsResponse",
    "SaveFileRequest",
    "StatusResponse",
]
