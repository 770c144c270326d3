"""Shared fixtures for daemon-bridge tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from daemon_bridge.bridge import DaemonBridge
from daemon_bridge.config import BridgeConfig
from tests.fakes import NODE_ONE_HOST, NODE_ONE_TOKEN, NODE_TWO_HOST, NODE_TWO_TOKEN, FakeDaemons


@pytest.fixture
def config_data() -> dict:
    """Two nodes with one server each."""
    return {
        "nodes": [
            {"name": "node-1", "scheme": "https", "host": NODE_ONE_HOST, "port": 8080, "token": NODE_ONE_TOKEN},
            {"name": "node-2", "scheme": "http", "host": NODE_TWO_HOST, "port": 8081, "token": NODE_TWO_TOKEN},
        ],
        "servers": [
            {"id": "srv-a", "node": "node-1"},
            {"id": "srv-b", "node": "node-2"},
        ],
        "daemon_timeout_seconds": 5,
    }


@pytest.fixture
def bridge_config(config_data: dict) -> BridgeConfig:
    return BridgeConfig.model_validate(config_data)


@pytest.fixture
def daemons() -> FakeDaemons:
    return FakeDaemons()


@pytest.fixture
def bridge(bridge_config: BridgeConfig, daemons: FakeDaemons) -> DaemonBridge:
    """Bridge over the two-node config, talking to FakeDaemons."""
    return DaemonBridge.from_config(bridge_config, transport=daemons.transport)


@pytest.fixture
def config_file(tmp_path: Path, config_data: dict) -> Path:
    """The two-node config written to disk."""
    path = tmp_path / "bridge.json"
    path.write_text(json.dumps(config_data, indent=2))
    return path
