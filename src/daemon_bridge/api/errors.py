"""Structured API error handling.

This module provides:
- ErrorCode enum with domain-grouped error codes
- APIError exception class for structured error responses
- translate_bridge_error(): the displayable/internal split for bridge errors
- Global exception handlers for consistent error formatting

Only DisplayableError messages reach the panel verbatim. Every other
failure is logged with its detail and answered with a generic message.

Response format:
    {
        "detail": {
            "code": "SERVER_NOT_FOUND",
            "message": "Server 'abc' not found"
        }
    }
"""

from __future__ import annotations

__all__ = [
    "APIError",
    "ErrorCode",
    "api_error_handler",
    "http_exception_handler",
    "translate_bridge_error",
    "unhandled_exception_handler",
    "validation_error_handler",
]

from enum import Enum
from typing import Any

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from daemon_bridge.exceptions import (
    ConfigurationError,
    DaemonBridgeError,
    DaemonConnectionError,
    DisplayableError,
    FileOperationError,
    InvalidPathError,
    NotFoundError,
)
from daemon_bridge.telemetry.system_logger import get_system_logger

_logger = get_system_logger()

GENERIC_ERROR_MESSAGE = "An unexpected error occurred, please try again."


class ErrorCode(str, Enum):
    """API error codes for programmatic handling.

    Codes are namespaced by domain:
    - AUTH_*: Authentication/authorization errors
    - SERVER_*, NODE_*: Unknown identities
    - PATH_*, FILE_*: File browser errors
    - DAEMON_*: Node daemon errors
    - VALIDATION_*, INTERNAL_*: Generic errors
    """

    AUTH_REQUIRED = "AUTH_REQUIRED"
    AUTH_FORBIDDEN = "AUTH_FORBIDDEN"

    SERVER_NOT_FOUND = "SERVER_NOT_FOUND"
    NODE_NOT_FOUND = "NODE_NOT_FOUND"
    NOT_FOUND = "NOT_FOUND"

    PATH_INVALID = "PATH_INVALID"
    FILE_OPERATION_FAILED = "FILE_OPERATION_FAILED"

    DAEMON_UNAVAILABLE = "DAEMON_UNAVAILABLE"

    VALIDATION_ERROR = "VALIDATION_ERROR"
    CONFIG_INVALID = "CONFIG_INVALID"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class APIError(HTTPException):
    """Structured API error with error code.

    Attributes:
        status_code: HTTP status code.
        code: Error code from ErrorCode enum.
        error_message: Human-readable error message.
        error_details: Optional contextual details.
    """

    def __init__(
        self,
        status_code: int,
        code: ErrorCode,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.code = code
        self.error_message = message
        self.error_details = details

        detail: dict[str, Any] = {
            "code": code.value,
            "message": message,
        }
        if details:
            detail["details"] = details

        super().__init__(status_code=status_code, detail=detail)


def translate_bridge_error(exc: DaemonBridgeError, fallback_message: str, **context: Any) -> APIError:
    """Convert a bridge error into the APIError shown to the panel.

    Args:
        exc: Error raised by a bridge operation.
        fallback_message: Operation-specific text used when exc is not displayable.
        **context: Extra fields for the log entry (server_id, node, ...).

    Returns:
        APIError carrying either the displayable message or fallback_message.
    """
    if isinstance(exc, NotFoundError):
        code = ErrorCode.SERVER_NOT_FOUND if exc.kind == "server" else ErrorCode.NODE_NOT_FOUND
        return APIError(404, code, str(exc))
    if isinstance(exc, InvalidPathError):
        return APIError(400, ErrorCode.PATH_INVALID, str(exc))
    if isinstance(exc, FileOperationError):
        return APIError(500, ErrorCode.FILE_OPERATION_FAILED, str(exc))
    if isinstance(exc, DisplayableError):
        return APIError(500, ErrorCode.INTERNAL_ERROR, str(exc))

    log_entry: dict[str, Any] = {
        "event": "request_failed",
        "message": f"Request failed: {type(exc).__name__}",
        "error_type": type(exc).__name__,
        "error_message": str(exc),
        **context,
    }
    if isinstance(exc, DaemonConnectionError):
        log_entry.update({"node": exc.node, "url": exc.url, "reason": exc.reason})
        _logger.warning(log_entry)
        return APIError(502, ErrorCode.DAEMON_UNAVAILABLE, fallback_message)

    _logger.error(log_entry)
    if isinstance(exc, ConfigurationError):
        return APIError(500, ErrorCode.CONFIG_INVALID, fallback_message)
    return APIError(500, ErrorCode.INTERNAL_ERROR, fallback_message)


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions with structured response."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle Pydantic validation errors with structured response.

    Args:
        request: FastAPI request object.
        exc: RequestValidationError from Pydantic.

    Returns:
        JSONResponse with structured error detail including validation_errors.
    """
    errors = exc.errors()
    first_error = errors[0] if errors else {}

    loc = first_error.get("loc", [])
    msg = first_error.get("msg", "Validation error")

    if len(errors) == 1:
        field_parts = [str(part) for part in loc if part != "body"]
        field_name = ".".join(field_parts)
        message = f"{field_name}: {msg}" if field_name else msg
    else:
        message = f"{len(errors)} validation errors"

    detail: dict[str, Any] = {
        "code": ErrorCode.VALIDATION_ERROR.value,
        "message": message,
        "validation_errors": [
            {
                "loc": list(e.get("loc", [])),
                "msg": e.get("msg", ""),
                "type": e.get("type", ""),
            }
            for e in errors
        ],
    }

    return JSONResponse(status_code=422, content={"detail": detail})


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Wrap plain HTTPException details in the structured format."""
    if isinstance(exc.detail, dict) and "code" in exc.detail:
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    detail: dict[str, Any] = {
        "code": _status_to_error_code(exc.status_code).value,
        "message": str(exc.detail) if exc.detail else f"HTTP {exc.status_code}",
    }
    return JSONResponse(status_code=exc.status_code, content={"detail": detail})


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler: log the detail, return a generic message."""
    _logger.error(
        {
            "event": "unhandled_exception",
            "message": f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}",
            "error_type": type(exc).__name__,
            "error_message": str(exc),
            "path": request.url.path,
        }
    )
    return JSONResponse(
        status_code=500,
        content={"detail": {"code": ErrorCode.INTERNAL_ERROR.value, "message": GENERIC_ERROR_MESSAGE}},
    )


def _status_to_error_code(status_code: int) -> ErrorCode:
    """Map HTTP status code to default error code."""
    mapping = {
        400: ErrorCode.VALIDATION_ERROR,
        401: ErrorCode.AUTH_REQUIRED,
        403: ErrorCode.AUTH_FORBIDDEN,
        404: ErrorCode.NOT_FOUND,
        502: ErrorCode.DAEMON_UNAVAILABLE,
    }
    return mapping.get(status_code, ErrorCode.INTERNAL_ERROR)
