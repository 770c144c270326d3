"""Custom exceptions for daemon-bridge.

This module contains all custom exceptions used throughout the package.
Exceptions are organized into two categories:

Displayable Errors (message is safe to show a panel user):
    - NotFoundError: Server or node identity could not be resolved
    - InvalidPathError: Path input escapes the server root or is malformed
    - FileOperationError: Daemon reachable but reported an operation failure

Internal Errors (detail is logged, users see a generic message):
    - DaemonConnectionError: Transport-level failure reaching a daemon
    - ConfigurationError: Bridge configuration or node credentials unusable

Usage:
    from daemon_bridge.exceptions import DisplayableError, FileOperationError
"""

from __future__ import annotations

__all__ = [
    "ConfigurationError",
    "DaemonBridgeError",
    "DaemonConnectionError",
    "DisplayableError",
    "FileOperationError",
    "InvalidPathError",
    "NotFoundError",
]


class DaemonBridgeError(Exception):
    """Base class for all daemon-bridge errors."""


class DisplayableError(DaemonBridgeError):
    """Marker base for errors whose message may be shown to end users.

    Anything that is not a DisplayableError must be logged and replaced
    with a generic message at the request handler boundary.
    """


# =============================================================================
# Displayable Errors
# =============================================================================


class NotFoundError(DisplayableError):
    """Server or node identity is not known to the node store.

    Attributes:
        kind: What was looked up ("server" or "node").
        identifier: The identifier that failed to resolve.
    """

    def __init__(self, kind: str, identifier: str) -> None:
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"{kind.capitalize()} '{identifier}' not found")


class InvalidPathError(DisplayableError):
    """Path would escape the server root or contains illegal segments.

    Always a caller-input problem, never retried.

    Attributes:
        raw_path: The rejected input as supplied by the caller.
        reason: Short description of why the path was rejected.
    """

    def __init__(self, raw_path: str, reason: str) -> None:
        self.raw_path = raw_path
        self.reason = reason
        super().__init__(f"Invalid path: {reason}")


class FileOperationError(DisplayableError):
    """Daemon was reached but reported a failed file operation.

    The message includes daemon-provided detail when the daemon sent one,
    otherwise a generic fallback.

    Attributes:
        status_code: HTTP status returned by the daemon (None if the body was at fault).
        detail: Daemon-provided error text, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        detail: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.detail = detail
        super().__init__(message)


# =============================================================================
# Internal Errors
# =============================================================================


class DaemonConnectionError(DaemonBridgeError):
    """Any transport-level failure reaching a daemon.

    Covers DNS failures, refused connections, timeouts, TLS failures and
    unusable transport responses. The user-facing message is generic; the
    underlying cause is kept for logging. Safe for the caller to retry,
    this package never retries on its own.

    Attributes:
        node: Name of the node whose daemon was being contacted.
        url: Request URL (no credentials).
        cause: Underlying exception, if any.
    """

    def __init__(
        self,
        node: str,
        *,
        url: str | None = None,
        cause: BaseException | None = None,
        reason: str | None = None,
    ) -> None:
        self.node = node
        self.url = url
        self.cause = cause
        self.reason = reason or (type(cause).__name__ if cause is not None else "unknown")
        super().__init__("Unable to communicate with the node daemon. Please try again.")

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return f"DaemonConnectionError(node={self.node!r}, url={self.url!r}, reason={self.reason!r})"


class ConfigurationError(DaemonBridgeError):
    """Configuration is invalid or incomplete.

    Raised when:
    - Config file does not exist or contains invalid JSON
    - Config file fails Pydantic validation
    - A node has no usable daemon credential
    """
