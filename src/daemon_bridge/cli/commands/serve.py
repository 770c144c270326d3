"""Serve command for daemon-bridge CLI.

Starts the panel-facing HTTP API.
"""

from __future__ import annotations

__all__ = ["serve"]

import logging

import click
import uvicorn

from daemon_bridge.api import create_app
from daemon_bridge.bridge import DaemonBridge
from daemon_bridge.config import get_system_log_path
from daemon_bridge.telemetry.system_logger import (
    configure_system_logger_file,
    get_system_logger,
    set_console_level,
)

from ..helpers import get_cli_config_path, load_config_or_exit
from ..styling import style_dim, style_warning


@click.command()
@click.option("--host", default=None, help="Bind address (overrides api.host)")
@click.option("--port", type=int, default=None, help="Bind port (overrides api.port)")
@click.pass_context
def serve(ctx: click.Context, host: str | None, port: int | None) -> None:
    """Start the panel API.

    Node and server records are re-read from the config file on every
    request; API settings are read once at startup.
    """
    config_path = get_cli_config_path(ctx)
    config = load_config_or_exit(ctx)

    configure_system_logger_file(get_system_log_path(config))
    set_console_level(config.logging.log_level)

    effective_host = host or config.api.host
    effective_port = port if port is not None else config.api.port

    if config.api.token is None:
        click.echo(style_warning("api.token is not set: /api/* is unauthenticated"), err=True)

    bridge = DaemonBridge.from_config_file(config_path)
    app = create_app(bridge, token=config.api.token)

    # Suppress uvicorn's logging (we use our own)
    for logger_name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(logger_name).setLevel(logging.CRITICAL)

    get_system_logger().info(
        {
            "event": "api_starting",
            "message": f"API starting on {effective_host}:{effective_port}",
            "host": effective_host,
            "port": effective_port,
            "config_path": str(config_path),
        }
    )
    click.echo(style_dim(f"Listening on http://{effective_host}:{effective_port}"), err=True)

    uvicorn.run(app, host=effective_host, port=effective_port, log_config=None)
