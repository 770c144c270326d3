"""HTTP client for node daemons.

Every daemon call goes through DaemonClient.send():
- The client is bound to exactly one NodeConnection; its credential is set
  once as a default header, so it can never be attached to another node.
- A single fixed timeout applies to every call.
- Any request-level httpx failure (DNS, refused, timeout, TLS, protocol)
  becomes DaemonConnectionError with the cause attached.
- Status codes are NOT interpreted here; callers decide what success means.

Usage:
    async with open_daemon_client(connection, server_id=server_id) as client:
        response = await client.send("GET", "/server")
"""

from __future__ import annotations

__all__ = [
    "USER_AGENT",
    "DaemonClient",
    "open_daemon_client",
]

import time
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

import httpx

from daemon_bridge import __version__
from daemon_bridge.constants import APP_NAME, AUTH_HEADER, DEFAULT_DAEMON_TIMEOUT_SECONDS, SERVER_HEADER
from daemon_bridge.exceptions import DaemonConnectionError
from daemon_bridge.nodes.resolver import NodeConnection
from daemon_bridge.telemetry.system_logger import get_system_logger

USER_AGENT = f"{APP_NAME}/{__version__}"

_logger = get_system_logger()


def _build_headers(connection: NodeConnection, server_id: str | None) -> dict[str, str]:
    headers = {
        AUTH_HEADER: f"Bearer {connection.token}",
        "Accept": "application/json",
        "User-Agent": USER_AGENT,
    }
    if server_id is not None:
        headers[SERVER_HEADER] = server_id
    return headers


class DaemonClient:
    """Authenticated client for one node's daemon.

    Do not construct directly; use open_daemon_client() so the underlying
    connection pool is closed when the call chain finishes.
    """

    def __init__(self, connection: NodeConnection, http_client: httpx.AsyncClient) -> None:
        self._connection = connection
        self._http = http_client

    @property
    def connection(self) -> NodeConnection:
        return self._connection

    async def send(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
    ) -> httpx.Response:
        """Send one request to the daemon.

        Args:
            method: HTTP method.
            path: Path relative to the daemon base URL (already URL-encoded).
            json: Optional JSON body.

        Returns:
            The raw response, whatever its status code.

        Raises:
            DaemonConnectionError: On any transport-level failure.
        """
        start_time = time.monotonic()
        url = f"{self._connection.base_url}{path}"
        try:
            response = await self._http.request(method, path, json=json)
        except httpx.TimeoutException as e:
            self._log_failure(method, path, e, start_time, reason="timeout")
            raise DaemonConnectionError(self._connection.name, url=url, cause=e, reason="timeout") from e
        except httpx.RequestError as e:
            self._log_failure(method, path, e, start_time, reason=type(e).__name__)
            raise DaemonConnectionError(self._connection.name, url=url, cause=e) from e
        except httpx.InvalidURL as e:
            self._log_failure(method, path, e, start_time, reason="invalid_url")
            raise DaemonConnectionError(self._connection.name, url=url, cause=e, reason="invalid_url") from e

        _logger.debug(
            {
                "event": "daemon_request",
                "message": f"{method} {path} on node '{self._connection.name}' -> {response.status_code}",
                "node": self._connection.name,
                "method": method,
                "path": path,
                "status_code": response.status_code,
                "duration_ms": int((time.monotonic() - start_time) * 1000),
            }
        )
        return response

    def _log_failure(
        self,
        method: str,
        path: str,
        exc: Exception,
        start_time: float,
        *,
        reason: str,
    ) -> None:
        _logger.warning(
            {
                "event": "daemon_unreachable",
                "message": f"Failed to reach daemon on node '{self._connection.name}' ({reason})",
                "node": self._connection.name,
                "base_url": self._connection.base_url,
                "method": method,
                "path": path,
                "error_type": type(exc).__name__,
                "error_message": str(exc),
                "duration_ms": int((time.monotonic() - start_time) * 1000),
            }
        )


@asynccontextmanager
async def open_daemon_client(
    connection: NodeConnection,
    *,
    server_id: str | None = None,
    timeout: float = DEFAULT_DAEMON_TIMEOUT_SECONDS,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AsyncIterator[DaemonClient]:
    """Create a DaemonClient bound to one node.

    This is an async context manager that properly handles client lifecycle.
    Cancelling the enclosing task aborts any in-flight request.

    Args:
        connection: Node to talk to. Its token is the only credential sent.
        server_id: Server identity for server-scoped calls (X-Access-Server).
        timeout: Timeout for each call in seconds.
        transport: Optional transport override (tests, custom TLS).

    Yields:
        DaemonClient bound to the node.
    """
    async with httpx.AsyncClient(
        base_url=connection.base_url,
        headers=_build_headers(connection, server_id),
        timeout=timeout,
        verify=connection.verify_tls,
        transport=transport,
        follow_redirects=False,
    ) as http_client:
        yield DaemonClient(connection, http_client)
