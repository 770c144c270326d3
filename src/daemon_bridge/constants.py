"""Application-wide constants for daemon-bridge.

Constants that define application behavior.
For user-configurable settings per deployment, see config.py.
"""

__all__ = [
    # Application identity
    "APP_NAME",
    "CONFIG_FILENAME",
    "CONFIG_PATH_ENV_VAR",
    # Daemon HTTP client
    "DEFAULT_DAEMON_TIMEOUT_SECONDS",
    "MIN_DAEMON_TIMEOUT_SECONDS",
    "MAX_DAEMON_TIMEOUT_SECONDS",
    "AUTH_HEADER",
    "SERVER_HEADER",
    # Daemon endpoints
    "DAEMON_STATUS_ENDPOINT",
    "DAEMON_DIRECTORY_ENDPOINT",
    "DAEMON_FILE_ENDPOINT",
    "DAEMON_SYSTEM_ENDPOINT",
    "DAEMON_RUNNING_STATUS",
    # File browser
    "EDITABLE_EXTENSIONS",
    # Panel API server
    "DEFAULT_API_HOST",
    "DEFAULT_API_PORT",
    "MAX_REQUEST_SIZE",
]

# ============================================================================
# Application Identity
# ============================================================================

# Application name used for directory names, keyring service, logger names
APP_NAME: str = "daemon-bridge"

# Config file stored in click.get_app_dir(APP_NAME)
CONFIG_FILENAME: str = "bridge.json"

# Environment variable that overrides the config file location
CONFIG_PATH_ENV_VAR: str = "DAEMON_BRIDGE_CONFIG"

# ============================================================================
# Daemon HTTP Client
# ============================================================================

# Single fixed timeout applied to every daemon call (seconds)
DEFAULT_DAEMON_TIMEOUT_SECONDS: int = 10

# Timeout validation range (seconds)
MIN_DAEMON_TIMEOUT_SECONDS: int = 1
MAX_DAEMON_TIMEOUT_SECONDS: int = 300

# Credential header sent on every daemon call ("Bearer <token>")
AUTH_HEADER: str = "Authorization"

# Identifies the target server on server-scoped calls
SERVER_HEADER: str = "X-Access-Server"

# ============================================================================
# Daemon Endpoints
# ============================================================================

DAEMON_STATUS_ENDPOINT: str = "/server"
DAEMON_DIRECTORY_ENDPOINT: str = "/server/directory"
DAEMON_FILE_ENDPOINT: str = "/server/file"
DAEMON_SYSTEM_ENDPOINT: str = "/api/system"

# Value of the status field that means "process running"
DAEMON_RUNNING_STATUS: int = 1

# ============================================================================
# File Browser
# ============================================================================

# Extensions the panel offers to open in its text editor
EDITABLE_EXTENSIONS: tuple[str, ...] = (
    "txt",
    "yml",
    "yaml",
    "log",
    "conf",
    "config",
    "html",
    "json",
    "properties",
    "props",
    "cfg",
    "lang",
    "ini",
    "cmd",
    "sh",
    "lua",
    "0",
)

# ============================================================================
# Panel API Server
# ============================================================================

DEFAULT_API_HOST: str = "127.0.0.1"
DEFAULT_API_PORT: int = 8790

# Max request body accepted by the panel API (1MB)
MAX_REQUEST_SIZE: int = 1024 * 1024
