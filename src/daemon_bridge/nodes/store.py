"""Read-only node metadata stores.

A NodeStore answers two questions: which node owns a server, and what
are a node's connection details. The resolver consumes it without caching.
"""

from __future__ import annotations

__all__ = [
    "FileNodeStore",
    "NodeStore",
    "StaticNodeStore",
]

from pathlib import Path
from typing import Protocol

from daemon_bridge.config import BridgeConfig, NodeConfig, load_bridge_config


class NodeStore(Protocol):
    """Lookup interface over server/node metadata."""

    def lookup_node(self, server_id: str) -> NodeConfig | None:
        """Return the node owning server_id, or None if the server is unknown."""
        ...

    def get_node(self, node_name: str) -> NodeConfig | None:
        """Return the node called node_name, or None if unknown."""
        ...

    def list_nodes(self) -> list[NodeConfig]:
        """Return all known nodes."""
        ...


class StaticNodeStore:
    """In-memory store over an already loaded BridgeConfig."""

    def __init__(self, config: BridgeConfig) -> None:
        self._config = config

    def lookup_node(self, server_id: str) -> NodeConfig | None:
        return _lookup(self._config, server_id)

    def get_node(self, node_name: str) -> NodeConfig | None:
        return _get(self._config, node_name)

    def list_nodes(self) -> list[NodeConfig]:
        return list(self._config.nodes)


class FileNodeStore:
    """Store that re-reads the config file on every lookup.

    Token rotation or server moves written to the file take effect on the
    very next call, with no restart.
    """

    def __init__(self, config_path: Path) -> None:
        self._config_path = config_path

    @property
    def config_path(self) -> Path:
        return self._config_path

    def lookup_node(self, server_id: str) -> NodeConfig | None:
        return _lookup(load_bridge_config(self._config_path), server_id)

    def get_node(self, node_name: str) -> NodeConfig | None:
        return _get(load_bridge_config(self._config_path), node_name)

    def list_nodes(self) -> list[NodeConfig]:
        return list(load_bridge_config(self._config_path).nodes)


def _lookup(config: BridgeConfig, server_id: str) -> NodeConfig | None:
    for server in config.servers:
        if server.id == server_id:
            return _get(config, server.node)
    return None


def _get(config: BridgeConfig, node_name: str) -> NodeConfig | None:
    for node in config.nodes:
        if node.name == node_name:
            return node
    return None
