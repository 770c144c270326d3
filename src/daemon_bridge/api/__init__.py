"""Panel-facing HTTP API (FastAPI)."""

from daemon_bridge.api.server import create_app

__all__ = ["create_app"]
