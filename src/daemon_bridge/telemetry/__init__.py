"""Operational logging for daemon-bridge.

Structure:
    system_logger   Singleton system logger (stderr + system.jsonl)
"""

from daemon_bridge.telemetry.system_logger import (
    ConsoleFormatter,
    configure_system_logger_file,
    get_system_logger,
    set_console_level,
)

__all__ = [
    "ConsoleFormatter",
    "configure_system_logger_file",
    "get_system_logger",
    "set_console_level",
]
