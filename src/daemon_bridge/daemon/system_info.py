"""Node-level system information from a daemon."""

from __future__ import annotations

__all__ = ["get_system_info"]

from typing import Any

import httpx

from daemon_bridge.constants import DAEMON_SYSTEM_ENDPOINT, DEFAULT_DAEMON_TIMEOUT_SECONDS
from daemon_bridge.daemon.client import open_daemon_client
from daemon_bridge.exceptions import DaemonConnectionError
from daemon_bridge.nodes.resolver import NodeConnection


async def get_system_info(
    connection: NodeConnection,
    *,
    timeout: float = DEFAULT_DAEMON_TIMEOUT_SECONDS,
    transport: httpx.AsyncBaseTransport | None = None,
) -> dict[str, Any]:
    """Fetch the daemon's system information.

    The body is returned as-is; its schema belongs to the daemon.

    Args:
        connection: Node whose daemon to query.
        timeout: Request timeout in seconds.
        transport: Optional transport override.

    Returns:
        Decoded JSON object.

    Raises:
        DaemonConnectionError: On transport failure, a non-200 status
            (including 401/403 credential rejection) or a body that is not
            a JSON object.
    """
    async with open_daemon_client(connection, timeout=timeout, transport=transport) as client:
        response = await client.send("GET", DAEMON_SYSTEM_ENDPOINT)

    url = str(response.request.url)
    if response.status_code != 200:
        raise DaemonConnectionError(
            connection.name,
            url=url,
            reason=f"http_{response.status_code}",
        )

    try:
        data = response.json()
    except ValueError as e:
        raise DaemonConnectionError(connection.name, url=url, cause=e, reason="malformed_body") from e

    if not isinstance(data, dict):
        raise DaemonConnectionError(connection.name, url=url, reason="malformed_body")
    return data
