"""Node connection resolution.

Turns a server identity (or a node name) into the NodeConnection used to
talk to that node's daemon. Pure lookup, no network I/O, no caching:
every call reads the store again so rotated credentials apply immediately.
"""

from __future__ import annotations

__all__ = [
    "NodeConnection",
    "NodeResolver",
    "connection_from_config",
]

from dataclasses import dataclass, field

from daemon_bridge.config import NodeConfig
from daemon_bridge.exceptions import ConfigurationError, NotFoundError
from daemon_bridge.nodes.credentials import load_credential
from daemon_bridge.nodes.store import NodeStore


@dataclass(frozen=True)
class NodeConnection:
    """Transient, read-only connection details for one node's daemon.

    Attributes:
        name: Node name (used in logs and errors).
        scheme: "http" or "https".
        host: Daemon host.
        port: Daemon port.
        token: Shared secret. Excluded from repr so it never leaks into logs.
        verify_tls: Verify the daemon certificate on https.
    """

    name: str
    scheme: str
    host: str
    port: int
    token: str = field(repr=False)
    verify_tls: bool = True

    @property
    def base_url(self) -> str:
        """Daemon base URL, e.g. "https://node1.example.com:8080"."""
        host = f"[{self.host}]" if ":" in self.host else self.host
        return f"{self.scheme}://{host}:{self.port}"


def connection_from_config(node: NodeConfig) -> NodeConnection:
    """Build a NodeConnection from a node record.

    The keychain entry (credential_key) wins over a literal token.

    Raises:
        ConfigurationError: If no credential can be found for the node.
    """
    token: str | None = None
    if node.credential_key:
        try:
            token = load_credential(node.credential_key)
        except RuntimeError as e:
            raise ConfigurationError(f"Cannot load credential for node '{node.name}': {e}") from e
    if token is None:
        token = node.token
    if not token:
        raise ConfigurationError(f"Node '{node.name}' has no daemon credential configured")

    return NodeConnection(
        name=node.name,
        scheme=node.scheme,
        host=node.host,
        port=node.port,
        token=token,
        verify_tls=node.verify_tls,
    )


class NodeResolver:
    """Resolves server identities and node names to NodeConnections."""

    def __init__(self, store: NodeStore) -> None:
        self._store = store

    @property
    def store(self) -> NodeStore:
        return self._store

    def resolve(self, server_id: str) -> NodeConnection:
        """Resolve the node owning a server.

        Raises:
            NotFoundError: If the server is unknown.
            ConfigurationError: If the owning node has no usable credential.
        """
        node = self._store.lookup_node(server_id)
        if node is None:
            raise NotFoundError("server", server_id)
        return connection_from_config(node)

    def resolve_node(self, node_name: str) -> NodeConnection:
        """Resolve a node by name.

        Raises:
            NotFoundError: If the node is unknown.
            ConfigurationError: If the node has no usable credential.
        """
        node = self._store.get_node(node_name)
        if node is None:
            raise NotFoundError("node", node_name)
        return connection_from_config(node)
