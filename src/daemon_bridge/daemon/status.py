"""Power status check for a single server.

is_running() is advisory and polled frequently by the panel, so it never
raises a bridge error: every failure means "not confirmed running" and is
logged for diagnostics instead.
"""

from __future__ import annotations

__all__ = ["StatusProxy"]

import httpx
from pydantic import ValidationError

from daemon_bridge.constants import DAEMON_RUNNING_STATUS, DAEMON_STATUS_ENDPOINT, DEFAULT_DAEMON_TIMEOUT_SECONDS
from daemon_bridge.daemon.client import open_daemon_client
from daemon_bridge.daemon.models import ServerStatusPayload
from daemon_bridge.exceptions import DaemonBridgeError, DaemonConnectionError
from daemon_bridge.nodes.resolver import NodeResolver
from daemon_bridge.telemetry.system_logger import get_system_logger

_logger = get_system_logger()


class StatusProxy:
    """Asks a server's daemon whether the managed process is running."""

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

    async def is_running(self, server_id: str) -> bool:
        """Return True only if the daemon confirms the server is running.

        Unknown servers, missing credentials, unreachable daemons, non-200
        responses and malformed bodies all return False.
        """
        try:
            connection = self._resolver.resolve(server_id)
            async with open_daemon_client(
                connection,
                server_id=server_id,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.send("GET", DAEMON_STATUS_ENDPOINT)
        except DaemonConnectionError as e:
            self._log_anomaly(server_id, "status_daemon_unreachable", f"Daemon unreachable ({e.reason})")
            return False
        except DaemonBridgeError as e:
            self._log_anomaly(server_id, "status_resolution_failed", str(e))
            return False

        if response.status_code != 200:
            self._log_anomaly(
                server_id,
                "status_unexpected_response",
                f"Daemon returned HTTP {response.status_code}",
                status_code=response.status_code,
            )
            return False

        try:
            payload = ServerStatusPayload.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            self._log_anomaly(server_id, "status_malformed_body", f"Malformed status body: {type(e).__name__}")
            return False

        return payload.status == DAEMON_RUNNING_STATUS

    @staticmethod
    def _log_anomaly(server_id: str, event: str, message: str, **extra: object) -> None:
        _logger.warning(
            {
                "event": event,
                "message": f"Status check for server '{server_id}' returned not running: {message}",
                "server_id": server_id,
                **extra,
            }
        )
