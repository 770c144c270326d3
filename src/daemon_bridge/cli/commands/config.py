"""Config command group for daemon-bridge CLI.

Provides configuration inspection and API token subcommands.
"""

from __future__ import annotations

__all__ = ["config"]

import json

import click

from daemon_bridge.api.security import generate_token
from daemon_bridge.config import get_system_log_path, save_bridge_config

from ..helpers import get_cli_config_path, load_config_or_exit
from ..styling import style_dim, style_header, style_label, style_success

REDACTED = "********"


@click.group()
def config() -> None:
    """Configuration management commands."""
    pass


@config.command("path")
@click.pass_context
def config_path(ctx: click.Context) -> None:
    """Show config file path."""
    path = get_cli_config_path(ctx)
    click.echo(str(path))
    if not path.exists():
        click.echo(style_dim("(file does not exist)"), err=True)


@config.command("show")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def config_show(ctx: click.Context, as_json: bool) -> None:
    """Display validated configuration with secrets redacted."""
    bridge_config = load_config_or_exit(ctx)

    data = bridge_config.model_dump()
    for node in data["nodes"]:
        if node.get("token"):
            node["token"] = REDACTED
    if data["api"].get("token"):
        data["api"]["token"] = REDACTED

    if as_json:
        click.echo(json.dumps(data, indent=2))
        return

    click.echo(style_header("Configuration"))
    click.echo(f"{style_label('Config file')} {get_cli_config_path(ctx)}")
    click.echo(f"{style_label('System log')} {get_system_log_path(bridge_config)}")
    click.echo(f"{style_label('Daemon timeout')} {bridge_config.daemon_timeout_seconds}s")
    click.echo(f"{style_label('API')} {bridge_config.api.host}:{bridge_config.api.port}")
    click.echo(f"{style_label('API token')} {'set' if bridge_config.api.token else 'not set'}")

    click.echo()
    click.echo(style_header("Nodes"))
    if not data["nodes"]:
        click.echo(style_dim("  (none)"))
    for node in data["nodes"]:
        credential = node.get("credential_key") or node.get("token") or "missing"
        click.echo(f"  {node['name']}: {node['scheme']}://{node['host']}:{node['port']} ({credential})")

    click.echo()
    click.echo(style_header("Servers"))
    if not data["servers"]:
        click.echo(style_dim("  (none)"))
    for server in data["servers"]:
        click.echo(f"  {server['id']} -> {server['node']}")


@config.command("rotate-api-token")
@click.pass_context
def rotate_api_token(ctx: click.Context) -> None:
    """Generate a new panel API token and store it in the config file.

    The token is printed once. Restart 'serve' for it to take effect.
    """
    config_path = get_cli_config_path(ctx)
    bridge_config = load_config_or_exit(ctx)

    token = generate_token()
    bridge_config.api.token = token
    save_bridge_config(bridge_config, config_path)

    click.echo(style_success(f"New API token written to {config_path}"), err=True)
    click.echo(token)
