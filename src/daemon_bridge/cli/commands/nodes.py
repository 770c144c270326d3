"""Nodes command group for daemon-bridge CLI.

Inspect configured nodes and manage their daemon credentials.
"""

from __future__ import annotations

__all__ = ["nodes"]

import json

import click

from daemon_bridge.bridge import DaemonBridge
from daemon_bridge.config import save_bridge_config
from daemon_bridge.nodes.credentials import get_credential_storage

from ..helpers import bridge_errors_as_click, get_cli_config_path, load_config_or_exit, run_async
from ..styling import style_dim, style_error, style_header, style_label, style_success


@click.group()
def nodes() -> None:
    """Node management commands."""
    pass


@nodes.command("list")
@click.pass_context
def list_nodes(ctx: click.Context) -> None:
    """List configured nodes and how many servers each hosts."""
    config = load_config_or_exit(ctx)

    if not config.nodes:
        click.echo(style_dim("No nodes configured."))
        return

    click.echo(style_header("Nodes"))
    for node in config.nodes:
        server_count = sum(1 for server in config.servers if server.node == node.name)
        if node.credential_key:
            credential = "keychain"
        elif node.token:
            credential = "token"
        else:
            credential = click.style("missing", fg="red")
        click.echo(
            f"  {click.style(node.name, bold=True)}  {node.scheme}://{node.host}:{node.port}"
            f"  servers={server_count}  credential={credential}"
        )


@nodes.command("info")
@click.argument("name")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def node_info(ctx: click.Context, name: str, as_json: bool) -> None:
    """Query the daemon on node NAME for its system information."""
    with bridge_errors_as_click():
        bridge = DaemonBridge.from_config_file(get_cli_config_path(ctx))
        info = run_async(bridge.get_node_system_info_by_name(name))

    if as_json:
        click.echo(json.dumps(info, indent=2))
        return

    click.echo(style_header(f"Node {name}"))
    for key, value in info.items():
        rendered = json.dumps(value) if isinstance(value, (dict, list)) else str(value)
        click.echo(f"  {style_label(key)} {rendered}")


@nodes.command("set-token")
@click.argument("name")
@click.pass_context
def set_token(ctx: click.Context, name: str) -> None:
    """Store the daemon secret for node NAME in the OS keychain.

    The config file is updated to reference the keychain entry and any
    literal token is removed from it. Takes effect on the next daemon call.
    """
    config_path = get_cli_config_path(ctx)
    config = load_config_or_exit(ctx)

    node = next((n for n in config.nodes if n.name == name), None)
    if node is None:
        click.echo(style_error(f"Node '{name}' not found"), err=True)
        raise SystemExit(1)

    secret = click.prompt(
        "Daemon secret",
        hide_input=True,
        confirmation_prompt=True,
    ).strip()
    if not secret:
        click.echo(style_error("Secret cannot be empty"), err=True)
        raise SystemExit(1)

    storage = get_credential_storage(name)
    try:
        storage.save(secret)
    except RuntimeError as e:
        click.echo(style_error(str(e)), err=True)
        raise SystemExit(1)

    node.credential_key = storage.credential_key
    node.token = None
    save_bridge_config(config, config_path)

    click.echo(style_success(f"Stored daemon secret for node '{name}' in keychain"))


@nodes.command("clear-token")
@click.argument("name")
@click.pass_context
def clear_token(ctx: click.Context, name: str) -> None:
    """Remove the keychain secret for node NAME.

    The config file stops referencing the keychain entry. Calls to the node
    fail until a new secret is stored with set-token.
    """
    config_path = get_cli_config_path(ctx)
    config = load_config_or_exit(ctx)

    node = next((n for n in config.nodes if n.name == name), None)
    if node is None:
        click.echo(style_error(f"Node '{name}' not found"), err=True)
        raise SystemExit(1)

    try:
        get_credential_storage(name).delete()
    except RuntimeError as e:
        click.echo(style_error(str(e)), err=True)
        raise SystemExit(1)

    if node.credential_key is not None:
        node.credential_key = None
        save_bridge_config(config, config_path)

    click.echo(style_success(f"Removed daemon secret for node '{name}' from keychain"))
