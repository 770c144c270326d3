"""Security middleware and token handling for the panel API.

The panel's request handlers call this API with a shared bearer token.
Controls:
- Request size limit
- Bearer token authentication for /api/* endpoints (constant-time compare)
- Security response headers

User sessions and permissions live in the panel; this layer only proves
the caller is the panel. Per-operation capability checks are in
authorization.py.
"""

from __future__ import annotations

__all__ = [
    "SecurityMiddleware",
    "extract_bearer_token",
    "generate_token",
    "validate_token",
]

import hmac
import secrets

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

from daemon_bridge.constants import MAX_REQUEST_SIZE
from daemon_bridge.telemetry.system_logger import get_system_logger

logger = get_system_logger()


def generate_token() -> str:
    """Generate a secure random token.

    Returns:
        64-character hex string (32 bytes of randomness).
    """
    return secrets.token_hex(32)


def validate_token(provided: str, expected: str) -> bool:
    """Validate token using constant-time comparison.

    Args:
        provided: Token from request.
        expected: Expected token.

    Returns:
        True if tokens match, False otherwise.
    """
    return hmac.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))


def extract_bearer_token(request: Request) -> str | None:
    """Return the token from an "Authorization: Bearer ..." header, if any."""
    auth_header: str = request.headers.get("authorization", "")
    if auth_header.startswith("Bearer "):
        return auth_header[7:]
    return None


class SecurityMiddleware(BaseHTTPMiddleware):
    """Request size limit, bearer authentication and response headers."""

    def __init__(self, app: ASGIApp, token: str | None = None) -> None:
        """Initialize middleware.

        Args:
            app: ASGI application.
            token: Expected bearer token. None disables authentication.
        """
        super().__init__(app)
        self.token = token

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        content_length = request.headers.get("content-length")
        if content_length:
            try:
                if int(content_length) > MAX_REQUEST_SIZE:
                    return JSONResponse(
                        status_code=413,
                        content={"detail": {"code": "REQUEST_TOO_LARGE", "message": "Request too large"}},
                    )
            except ValueError:
                return JSONResponse(
                    status_code=400,
                    content={"detail": {"code": "VALIDATION_ERROR", "message": "Invalid content-length header"}},
                )

        if self.token and request.url.path.startswith("/api/"):
            provided = extract_bearer_token(request)
            if provided is None or not validate_token(provided, self.token):
                logger.warning(
                    {
                        "event": "unauthorized_request_rejected",
                        "message": f"Rejected unauthorized request: {request.method} {request.url.path}",
                        "component": "api_security",
                        "details": {"method": request.method, "path": str(request.url.path)},
                    }
                )
                return JSONResponse(
                    status_code=401,
                    content={"detail": {"code": "AUTH_REQUIRED", "message": "Unauthorized"}},
                )

        response = await call_next(request)
        self._add_security_headers(response)
        return response

    def _add_security_headers(self, response: Response) -> None:
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Cache-Control"] = "no-store"
        response.headers["Referrer-Policy"] = "same-origin"
