"""API route modules.

- servers: power status and file browsing (/api/servers)
- nodes: node system information (/api/nodes)
"""

from . import nodes, servers

__all__ = ["nodes", "servers"]
