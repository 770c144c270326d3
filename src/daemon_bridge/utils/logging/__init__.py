"""Logging utilities: formatters for console and JSONL output."""

from daemon_bridge.utils.logging.iso_formatter import ISO8601Formatter

__all__ = ["ISO8601Formatter"]
