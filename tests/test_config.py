"""Unit tests for bridge configuration.

Tests use the AAA pattern (Arrange-Act-Assert) for clarity.
"""

from __future__ import annotations

import json
import stat
import sys
from pathlib import Path

import pytest
from pydantic import ValidationError

from daemon_bridge.config import (
    BridgeConfig,
    NodeConfig,
    get_config_path,
    get_system_log_path,
    load_bridge_config,
    save_bridge_config,
)
from daemon_bridge.constants import CONFIG_PATH_ENV_VAR, DEFAULT_DAEMON_TIMEOUT_SECONDS
from daemon_bridge.exceptions import ConfigurationError


class TestBridgeConfig:
    """Tests for BridgeConfig validation."""

    def test_defaults(self) -> None:
        config = BridgeConfig()

        assert config.nodes == []
        assert config.servers == []
        assert config.daemon_timeout_seconds == DEFAULT_DAEMON_TIMEOUT_SECONDS
        assert config.api.token is None
        assert config.logging.log_level == "INFO"

    def test_node_defaults(self) -> None:
        node = NodeConfig(name="node-1", host="10.0.0.2")

        assert node.scheme == "https"
        assert node.port == 8080
        assert node.verify_tls is True

    def test_rejects_duplicate_node_names(self, config_data: dict) -> None:
        config_data["nodes"].append(dict(config_data["nodes"][0]))

        with pytest.raises(ValidationError, match="duplicate node names: node-1"):
            BridgeConfig.model_validate(config_data)

    def test_rejects_duplicate_server_ids(self, config_data: dict) -> None:
        config_data["servers"].append({"id": "srv-a", "node": "node-2"})

        with pytest.raises(ValidationError, match="duplicate server ids: srv-a"):
            BridgeConfig.model_validate(config_data)

    def test_rejects_server_on_unknown_node(self, config_data: dict) -> None:
        config_data["servers"].append({"id": "srv-c", "node": "node-9"})

        with pytest.raises(ValidationError, match="unknown node 'node-9'"):
            BridgeConfig.model_validate(config_data)

    @pytest.mark.parametrize("timeout", [0, 301])
    def test_rejects_out_of_range_timeout(self, config_data: dict, timeout: int) -> None:
        config_data["daemon_timeout_seconds"] = timeout

        with pytest.raises(ValidationError):
            BridgeConfig.model_validate(config_data)

    @pytest.mark.parametrize("scheme", ["ftp", "HTTPS", ""])
    def test_rejects_unknown_scheme(self, scheme: str) -> None:
        with pytest.raises(ValidationError):
            NodeConfig(name="n", host="h", scheme=scheme)

    @pytest.mark.parametrize("host", ["node1/evil", "node1?x=1", "node1#frag", "user@node1", "node 1", "https://node1"])
    def test_rejects_host_with_url_parts(self, host: str) -> None:
        """A host can never smuggle a path, query, fragment or userinfo into the daemon URL."""
        with pytest.raises(ValidationError):
            NodeConfig(name="n", host=host)

    @pytest.mark.parametrize("host", ["node1.example.com", "10.0.0.2", "::1", "fe80::1", "daemon_1"])
    def test_accepts_hostnames_and_addresses(self, host: str) -> None:
        assert NodeConfig(name="n", host=host).host == host

    def test_short_api_token_rejected(self) -> None:
        with pytest.raises(ValidationError):
            BridgeConfig.model_validate({"api": {"token": "short"}})

    def test_tokens_not_in_repr(self) -> None:
        config = BridgeConfig.model_validate(
            {"nodes": [{"name": "n", "host": "h", "token": "node-secret"}], "api": {"token": "a" * 32}}
        )

        assert "node-secret" not in repr(config)
        assert "a" * 32 not in repr(config)

    def test_unknown_keys_ignored(self, config_data: dict) -> None:
        config_data["legacy_setting"] = True

        config = BridgeConfig.model_validate(config_data)

        assert len(config.nodes) == 2


class TestConfigPath:
    """Tests for get_config_path()."""

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        target = tmp_path / "custom.json"
        monkeypatch.setenv(CONFIG_PATH_ENV_VAR, str(target))

        assert get_config_path() == target

    def test_default_is_in_app_dir(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(CONFIG_PATH_ENV_VAR, raising=False)

        assert get_config_path().name == "bridge.json"

    def test_system_log_path(self, bridge_config: BridgeConfig, tmp_path: Path) -> None:
        bridge_config.logging.log_dir = str(tmp_path)

        assert get_system_log_path(bridge_config) == tmp_path / "daemon-bridge" / "system.jsonl"


class TestLoadAndSave:
    """Tests for load_bridge_config() and save_bridge_config()."""

    def test_load_valid_file(self, config_file: Path) -> None:
        config = load_bridge_config(config_file)

        assert [s.id for s in config.servers] == ["srv-a", "srv-b"]

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="not found"):
            load_bridge_config(tmp_path / "missing.json")

    def test_invalid_json_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "bridge.json"
        path.write_text("{")

        with pytest.raises(ConfigurationError, match="Invalid JSON"):
            load_bridge_config(path)

    def test_invalid_content_raises_with_location(self, tmp_path: Path) -> None:
        path = tmp_path / "bridge.json"
        path.write_text(json.dumps({"nodes": [{"name": "n", "host": "h", "port": 0}]}))

        with pytest.raises(ConfigurationError, match="nodes.0.port"):
            load_bridge_config(path)

    def test_save_round_trip_omits_unset_secrets(self, bridge_config: BridgeConfig, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "bridge.json"

        written = save_bridge_config(bridge_config, path)

        assert written == path
        data = json.loads(path.read_text())
        assert "token" not in data["api"]
        assert load_bridge_config(path) == bridge_config

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions")
    def test_save_sets_owner_only_permissions(self, bridge_config: BridgeConfig, tmp_path: Path) -> None:
        path = tmp_path / "bridge.json"

        save_bridge_config(bridge_config, path)

        assert stat.S_IMODE(path.stat().st_mode) == 0o600
