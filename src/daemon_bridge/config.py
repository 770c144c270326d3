"""Application configuration for daemon-bridge.

Defines configuration models for nodes, servers, the panel API and logging.
Config is stored at the OS-appropriate location (via click.get_app_dir),
or wherever DAEMON_BRIDGE_CONFIG points.

Example usage:
    # Load from config file
    config = load_bridge_config()

    # Save configuration
    save_bridge_config(config)
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_LOG_DIR",
    "ApiConfig",
    "BridgeConfig",
    "LoggingConfig",
    "NodeConfig",
    "ServerConfig",
    "get_config_path",
    "get_system_log_path",
    "load_bridge_config",
    "save_bridge_config",
]

import json
import os
import sys
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, model_validator

from daemon_bridge.constants import (
    APP_NAME,
    CONFIG_FILENAME,
    CONFIG_PATH_ENV_VAR,
    DEFAULT_API_HOST,
    DEFAULT_API_PORT,
    DEFAULT_DAEMON_TIMEOUT_SECONDS,
    MAX_DAEMON_TIMEOUT_SECONDS,
    MIN_DAEMON_TIMEOUT_SECONDS,
)
from daemon_bridge.exceptions import ConfigurationError
from daemon_bridge.utils.file_helpers import get_app_dir, load_validated_json, set_secure_permissions


def _get_platform_log_dir() -> str:
    """Get platform-appropriate base log directory following OS conventions.

    Returns:
        Platform-specific base log directory path (unexpanded).

    Platform conventions:
        - macOS: ~/Library/Logs
        - Linux: $XDG_STATE_HOME (~/.local/state)
        - Windows: ~/AppData/Local
    """
    if sys.platform == "darwin":
        return "~/Library/Logs"
    elif sys.platform == "win32":
        return "~/AppData/Local"
    else:
        return os.environ.get("XDG_STATE_HOME", "~/.local/state")


# Default base log directory (platform-specific, follows OS conventions)
DEFAULT_LOG_DIR = _get_platform_log_dir()


# =============================================================================
# Node and Server Records
# =============================================================================


class NodeConfig(BaseModel):
    """Connection details for one node's daemon.

    Exactly one credential source is used: the literal token, or the
    keychain entry named by credential_key (checked first).

    Attributes:
        name: Unique node name.
        scheme: "http" or "https".
        host: Daemon host name, IPv4 or IPv6 address (no scheme or path).
        port: Daemon port.
        token: Shared secret sent as bearer credential.
        credential_key: Keychain key holding the shared secret.
        verify_tls: Verify the daemon certificate on https nodes.
    """

    name: str = Field(min_length=1, pattern=r"^[A-Za-z0-9][A-Za-z0-9_.-]*$")
    scheme: Literal["http", "https"] = "https"
    host: str = Field(min_length=1, pattern=r"^[A-Za-z0-9._:-]+$")
    port: int = Field(default=8080, ge=1, le=65535)
    token: str | None = Field(default=None, min_length=1, repr=False)
    credential_key: str | None = Field(
        default=None,
        description="Keychain key for the daemon credential",
    )
    verify_tls: bool = True


class ServerConfig(BaseModel):
    """A hosted server instance and the node that owns it.

    Attributes:
        id: Server identity (UUID issued by the panel).
        node: Name of the owning node.
    """

    id: str = Field(min_length=1)
    node: str = Field(min_length=1)


class ApiConfig(BaseModel):
    """Panel-facing HTTP API settings.

    Attributes:
        host: Bind address.
        port: Bind port.
        token: Bearer token panel request handlers must present.
            None disables the check (local development only).
    """

    host: str = Field(default=DEFAULT_API_HOST, min_length=1)
    port: int = Field(default=DEFAULT_API_PORT, ge=1024, le=65535)
    token: str | None = Field(default=None, min_length=16, repr=False)


class LoggingConfig(BaseModel):
    """Logging configuration settings.

    Logs are stored in <log_dir>/daemon-bridge/system.jsonl.

    Attributes:
        log_dir: Base directory for logs.
        log_level: Console logging level. DEBUG logs every daemon call.
    """

    log_dir: str = Field(default=DEFAULT_LOG_DIR, min_length=1)
    log_level: Literal["DEBUG", "INFO"] = "INFO"


class BridgeConfig(BaseModel):
    """Complete bridge configuration.

    Attributes:
        nodes: Known nodes and their daemon credentials.
        servers: Server-to-node assignments.
        daemon_timeout_seconds: Timeout applied to every daemon call.
        api: Panel API settings.
        logging: Logging settings.
    """

    nodes: list[NodeConfig] = Field(default_factory=list)
    servers: list[ServerConfig] = Field(default_factory=list)
    daemon_timeout_seconds: int = Field(
        default=DEFAULT_DAEMON_TIMEOUT_SECONDS,
        ge=MIN_DAEMON_TIMEOUT_SECONDS,
        le=MAX_DAEMON_TIMEOUT_SECONDS,
    )
    api: ApiConfig = Field(default_factory=ApiConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"extra": "ignore"}

    @model_validator(mode="after")
    def _check_references(self) -> "BridgeConfig":
        names = [node.name for node in self.nodes]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"duplicate node names: {', '.join(duplicates)}")

        server_ids = [server.id for server in self.servers]
        duplicate_ids = sorted({sid for sid in server_ids if server_ids.count(sid) > 1})
        if duplicate_ids:
            raise ValueError(f"duplicate server ids: {', '.join(duplicate_ids)}")

        known = set(names)
        for server in self.servers:
            if server.node not in known:
                raise ValueError(f"server '{server.id}' references unknown node '{server.node}'")
        return self


# =============================================================================
# Loading and Saving
# =============================================================================


def get_config_path() -> Path:
    """Get the config file path.

    Returns:
        DAEMON_BRIDGE_CONFIG if set, otherwise <app_dir>/bridge.json.
    """
    override = os.environ.get(CONFIG_PATH_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return get_app_dir() / CONFIG_FILENAME


def get_system_log_path(config: BridgeConfig) -> Path:
    """Get full path to the system log file.

    Args:
        config: Bridge configuration.

    Returns:
        Path: <log_dir>/daemon-bridge/system.jsonl.
    """
    return Path(config.logging.log_dir).expanduser() / APP_NAME / "system.jsonl"


def load_bridge_config(config_path: Path | None = None) -> BridgeConfig:
    """Load and validate bridge configuration.

    Args:
        config_path: Config file location. Defaults to get_config_path().

    Returns:
        BridgeConfig: Validated configuration.

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid.
    """
    path = config_path or get_config_path()
    try:
        return load_validated_json(path, BridgeConfig, file_type="config")
    except FileNotFoundError as e:
        raise ConfigurationError(f"{e}. Create it or set {CONFIG_PATH_ENV_VAR}.") from e
    except ValueError as e:
        raise ConfigurationError(str(e)) from e


def save_bridge_config(config: BridgeConfig, config_path: Path | None = None) -> Path:
    """Save bridge configuration with owner-only permissions.

    Args:
        config: Configuration to save.
        config_path: Destination. Defaults to get_config_path().

    Returns:
        Path the configuration was written to.

    Raises:
        OSError: If unable to write config file.
    """
    path = config_path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    with path.open("w", encoding="utf-8") as f:
        json.dump(config.model_dump(exclude_none=True), f, indent=2)
        f.write("\n")

    set_secure_permissions(path)
    return path
