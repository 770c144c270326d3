"""Shared helpers for CLI commands."""

from __future__ import annotations

__all__ = [
    "bridge_errors_as_click",
    "get_cli_config_path",
    "load_config_or_exit",
    "run_async",
]

import asyncio
from collections.abc import Coroutine, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any, TypeVar

import click

from daemon_bridge.config import BridgeConfig, get_config_path, load_bridge_config
from daemon_bridge.exceptions import ConfigurationError, DaemonBridgeError, DisplayableError

T = TypeVar("T")


def get_cli_config_path(ctx: click.Context) -> Path:
    """Config path from the root --config option, else the default location."""
    obj = ctx.find_root().obj or {}
    return obj.get("config_path") or get_config_path()


def load_config_or_exit(ctx: click.Context) -> BridgeConfig:
    """Load the bridge config, turning failures into a ClickException."""
    try:
        return load_bridge_config(get_cli_config_path(ctx))
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e


def run_async(coro: Coroutine[Any, Any, T]) -> T:
    """Run a coroutine to completion from a synchronous click command."""
    return asyncio.run(coro)


@contextmanager
def bridge_errors_as_click() -> Iterator[None]:
    """Convert bridge errors to ClickExceptions with user-safe messages."""
    try:
        yield
    except DisplayableError as e:
        raise click.ClickException(str(e)) from e
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e
    except DaemonBridgeError as e:
        raise click.ClickException(f"{e} ({type(e).__name__})") from e
