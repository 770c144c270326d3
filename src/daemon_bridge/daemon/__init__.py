"""Daemon communication: HTTP client, payload models, status and system info."""

from daemon_bridge.daemon.client import DaemonClient, open_daemon_client
from daemon_bridge.daemon.status import StatusProxy
from daemon_bridge.daemon.system_info import get_system_info

__all__ = [
    "DaemonClient",
    "StatusProxy",
    "get_system_info",
    "open_daemon_client",
]
