"""System logger for operational events.

This module provides a singleton system logger for every operational event
of the bridge: daemon calls, transport failures, status anomalies and
configuration problems.

Logging strategy:
- Console (stderr): INFO and above (DEBUG when configured)
- File (system.jsonl): Only issues (WARNING, ERROR, CRITICAL)

The file handler is configured separately via configure_system_logger_file()
once the log_dir from config is available.

Messages are dicts with at least "event" and "message" keys. Daemon
credentials must never appear in a log message.
"""

from __future__ import annotations

__all__ = [
    "ConsoleFormatter",
    "configure_system_logger_file",
    "get_system_logger",
    "set_console_level",
]

import logging
import sys
from pathlib import Path

from daemon_bridge.constants import APP_NAME
from daemon_bridge.utils.file_helpers import set_secure_permissions
from daemon_bridge.utils.logging.iso_formatter import ISO8601Formatter


class ConsoleFormatter(logging.Formatter):
    """Human-readable formatter for console output.

    Extracts 'message' or 'event' field from dict messages for cleaner stderr output.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record for human-readable console output.

        Args:
            record: The log record to format.

        Returns:
            str: Formatted log message with level prefix.
        """
        if isinstance(record.msg, dict):
            msg = record.msg.get("message") or record.msg.get("event", "")
            return f"{record.levelname}: {msg}"
        return f"{record.levelname}: {record.getMessage()}"


# Module-level singleton logger
_system_logger: logging.Logger | None = None
_file_handler_configured: bool = False


def get_system_logger() -> logging.Logger:
    """Get the singleton system logger instance.

    Creates the logger on first call with stderr handler only.
    File handler is added later via configure_system_logger_file().

    Returns:
        logging.Logger: Configured system logger instance.

    Example:
        >>> logger = get_system_logger()
        >>> logger.warning({"event": "daemon_unreachable", "message": "..."})
    """
    global _system_logger

    if _system_logger is not None:
        return _system_logger

    _system_logger = logging.getLogger(f"{APP_NAME}.system")
    _system_logger.setLevel(logging.DEBUG)
    _system_logger.propagate = False

    # Close and remove any existing handlers to avoid duplicates and resource leaks
    for handler in _system_logger.handlers:
        handler.close()
    _system_logger.handlers.clear()

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.INFO)
    stderr_handler.setFormatter(ConsoleFormatter())
    _system_logger.addHandler(stderr_handler)

    return _system_logger


def set_console_level(level: str) -> None:
    """Change the stderr handler level (e.g. "DEBUG" to see every daemon call).

    Args:
        level: Logging level name.
    """
    logger = get_system_logger()
    for handler in logger.handlers:
        if type(handler) is logging.StreamHandler:
            handler.setLevel(level)


def configure_system_logger_file(log_path: Path) -> None:
    """Configure the system logger's file handler.

    Should be called once after config is loaded.
    The file handler logs WARNING, ERROR, CRITICAL only (persistent issues).

    Args:
        log_path: Path to the system log file.
    """
    global _file_handler_configured

    if _file_handler_configured:
        return

    logger = get_system_logger()

    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        set_secure_permissions(log_path.parent, is_directory=True)
    except OSError as e:
        logger.warning(
            {
                "event": "log_dir_unavailable",
                "message": f"Cannot create log directory {log_path.parent}, logging to stderr only",
                "error_type": type(e).__name__,
                "error_message": str(e),
            }
        )
        return

    file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    file_handler.setLevel(logging.WARNING)
    file_handler.setFormatter(ISO8601Formatter())
    logger.addHandler(file_handler)

    _file_handler_configured = True
