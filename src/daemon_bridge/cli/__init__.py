"""Command-line interface for daemon-bridge."""

from __future__ import annotations

__all__ = ["cli", "main"]

from .main import cli, main
