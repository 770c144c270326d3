"""Error response schemas for API documentation.

These schemas are used for OpenAPI documentation and type hints.
The actual error handling is in api/errors.py.
"""

from __future__ import annotations

__all__ = [
    "ErrorDetail",
    "ErrorResponse",
]

from typing import Any

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Structured error detail.

    Attributes:
        code: Error code for programmatic handling (e.g., "SERVER_NOT_FOUND").
        message: Message safe to show to a panel user.
        details: Optional contextual details.
    """

    code: str = Field(
        description="Error code for programmatic handling",
        examples=["SERVER_NOT_FOUND", "PATH_INVALID", "DAEMON_UNAVAILABLE"],
    )
    message: str = Field(description="Message safe to show to a panel user")
    details: dict[str, Any] | None = Field(default=None, description="Optional contextual details")


class ErrorResponse(BaseModel):
    """Full error response wrapper."""

    detail: ErrorDetail
