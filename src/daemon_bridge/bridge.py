"""DaemonBridge: the operations request handlers call.

Wires the resolver, file browser, status proxy and system-info query
together. Holds no per-call state; every call builds and discards its own
daemon client, so concurrent calls are independent.

Usage:
    bridge = DaemonBridge.from_config_file(get_config_path())
    running = await bridge.check_status(server_id)
    listing = await bridge.list_directory(server_id, "/plugins")
"""

from __future__ import annotations

__all__ = ["DaemonBridge"]

from pathlib import Path
from typing import Any

import httpx

from daemon_bridge.config import BridgeConfig, load_bridge_config
from daemon_bridge.constants import DEFAULT_DAEMON_TIMEOUT_SECONDS
from daemon_bridge.daemon.models import DirectoryListing, FileContents
from daemon_bridge.daemon.status import StatusProxy
from daemon_bridge.daemon.system_info import get_system_info
from daemon_bridge.files.browser import FileBrowser
from daemon_bridge.files.paths import PathSpec
from daemon_bridge.nodes.resolver import NodeConnection, NodeResolver
from daemon_bridge.nodes.store import FileNodeStore, NodeStore, StaticNodeStore


class DaemonBridge:
    """Facade over all daemon-backed operations."""

    def __init__(
        self,
        store: NodeStore,
        *,
        timeout: float = DEFAULT_DAEMON_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the bridge.

        Args:
            store: Server/node metadata lookup.
            timeout: Timeout for every daemon call in seconds.
            transport: Optional httpx transport shared by all daemon clients.
        """
        self._resolver = NodeResolver(store)
        self._timeout = timeout
        self._transport = transport
        self._files = FileBrowser(self._resolver, timeout=timeout, transport=transport)
        self._status = StatusProxy(self._resolver, timeout=timeout, transport=transport)

    @classmethod
    def from_config(
        cls,
        config: BridgeConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "DaemonBridge":
        """Build a bridge over an in-memory configuration."""
        return cls(StaticNodeStore(config), timeout=config.daemon_timeout_seconds, transport=transport)

    @classmethod
    def from_config_file(cls, config_path: Path) -> "DaemonBridge":
        """Build a bridge that re-reads config_path on every lookup.

        Raises:
            ConfigurationError: If the config file is missing or invalid.
        """
        config = load_bridge_config(config_path)
        return cls(FileNodeStore(config_path), timeout=config.daemon_timeout_seconds)

    @property
    def resolver(self) -> NodeResolver:
        return self._resolver

    async def check_status(self, server_id: str) -> bool:
        """True if the daemon confirms the server process is running. Never raises."""
        return await self._status.is_running(server_id)

    async def list_directory(self, server_id: str, raw_path: str | PathSpec | None) -> DirectoryListing:
        return await self._files.list_directory(server_id, raw_path)

    async def read_file(self, server_id: str, file_path: str) -> FileContents:
        return await self._files.read_file(server_id, file_path)

    async def save_file(self, server_id: str, file_path: str, contents: str) -> None:
        await self._files.save_file(server_id, file_path, contents)

    async def get_node_system_info(self, connection: NodeConnection) -> dict[str, Any]:
        return await get_system_info(connection, timeout=self._timeout, transport=self._transport)

    async def get_node_system_info_by_name(self, node_name: str) -> dict[str, Any]:
        """Resolve a node by name and fetch its system information.

        Raises:
            NotFoundError: Unknown node.
            ConfigurationError: Node has no usable credential.
            DaemonConnectionError: Daemon unreachable or rejected the request.
        """
        return await self.get_node_system_info(self._resolver.resolve_node(node_name))
