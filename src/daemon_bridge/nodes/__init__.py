"""Node metadata lookup and daemon credentials."""

from daemon_bridge.nodes.resolver import NodeConnection, NodeResolver, connection_from_config
from daemon_bridge.nodes.store import FileNodeStore, NodeStore, StaticNodeStore

__all__ = [
    "FileNodeStore",
    "NodeConnection",
    "NodeResolver",
    "NodeStore",
    "StaticNodeStore",
    "connection_from_config",
]
