"""Server commands for daemon-bridge CLI.

Run the same bridge operations the panel API exposes, straight from a
terminal. Useful for checking node credentials and daemon reachability.
"""

from __future__ import annotations

__all__ = ["cat", "ls", "save", "status"]

import json
import sys
from pathlib import Path

import click

from daemon_bridge.bridge import DaemonBridge
from daemon_bridge.daemon.models import FileEntry

from ..helpers import bridge_errors_as_click, get_cli_config_path, run_async
from ..styling import style_dim, style_error, style_header, style_success


def _open_bridge(ctx: click.Context) -> DaemonBridge:
    with bridge_errors_as_click():
        return DaemonBridge.from_config_file(get_cli_config_path(ctx))


def _format_size(entry: FileEntry) -> str:
    if entry.size is None:
        return "-"
    return str(entry.size)


@click.command()
@click.argument("server_id")
@click.pass_context
def status(ctx: click.Context, server_id: str) -> None:
    """Show whether SERVER_ID is running.

    Exits 0 if running, 1 otherwise. Any daemon problem reads as not running.
    """
    bridge = _open_bridge(ctx)
    running = run_async(bridge.check_status(server_id))

    if running:
        click.echo(style_success(f"{server_id} is running"))
    else:
        click.echo(style_error(f"{server_id} is not running"))
        sys.exit(1)


@click.command()
@click.argument("server_id")
@click.argument("path", default="/")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def ls(ctx: click.Context, server_id: str, path: str, as_json: bool) -> None:
    """List directory PATH of SERVER_ID (default: the server root)."""
    bridge = _open_bridge(ctx)
    with bridge_errors_as_click():
        listing = run_async(bridge.list_directory(server_id, path))

    if as_json:
        click.echo(json.dumps(listing.model_dump(mode="json", exclude_none=True), indent=2))
        return

    click.echo(style_header(f"{server_id}:{path}"))
    if not listing.folders and not listing.files:
        click.echo(style_dim("(empty)"))
        return

    for folder in listing.folders:
        click.echo(f"  {click.style(folder.name + '/', fg='blue', bold=True)}")
    for entry in listing.files:
        click.echo(f"  {entry.name:<40} {style_dim(_format_size(entry))}")


@click.command()
@click.argument("server_id")
@click.argument("path")
@click.pass_context
def cat(ctx: click.Context, server_id: str, path: str) -> None:
    """Print file PATH of SERVER_ID."""
    bridge = _open_bridge(ctx)
    with bridge_errors_as_click():
        result = run_async(bridge.read_file(server_id, path))

    click.echo(result.contents, nl=not result.contents.endswith("\n"))


@click.command()
@click.argument("server_id")
@click.argument("path")
@click.option(
    "--from-file",
    "source",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Read new contents from this local file instead of stdin",
)
@click.pass_context
def save(ctx: click.Context, server_id: str, path: str, source: Path | None) -> None:
    """Overwrite file PATH of SERVER_ID.

    New contents are read from stdin unless --from-file is given.

    \b
    Examples:
      daemon-bridge save <server-id> /server.properties --from-file server.properties
      echo "eula=true" | daemon-bridge save <server-id> /eula.txt
    """
    if source is not None:
        contents = source.read_text(encoding="utf-8")
    else:
        contents = sys.stdin.read()

    bridge = _open_bridge(ctx)
    with bridge_errors_as_click():
        run_async(bridge.save_file(server_id, path, contents))

    click.echo(style_success(f"Saved {path}"))
