"""Main CLI entry point for daemon-bridge.

Defines the CLI group and registers all subcommands.

Commands:
    config  - Configuration (path, show, rotate-api-token)
    nodes   - Node management (list, info, set-token, clear-token)
    serve   - Start the panel-facing HTTP API
    status  - Show whether a server is running
    ls      - List a server directory
    cat     - Print a server file
    save    - Overwrite a server file

Subcommand help:
    daemon-bridge COMMAND -h   Show help for a specific command
"""

from __future__ import annotations

__all__ = ["cli", "main"]

import sys
from pathlib import Path

import click

from daemon_bridge import __version__

from .commands.config import config
from .commands.nodes import nodes
from .commands.serve import serve
from .commands.servers import cat, ls, save, status


class ReorderedGroup(click.Group):
    """Custom group that shows commands before custom help text."""

    def format_epilog(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        """Add extra help after commands section."""
        formatter.write(
            """
Quick Start:
  daemon-bridge config path               Show where bridge.json is read from
  daemon-bridge nodes set-token node-1    Store a daemon secret in the keychain
  daemon-bridge status <server-id>        Check a server through its daemon
  daemon-bridge serve                     Start the panel API

Config file location can be overridden with --config or DAEMON_BRIDGE_CONFIG.
"""
        )


@click.group(
    cls=ReorderedGroup,
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.option("--version", "-v", is_flag=True, help="Show version")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to bridge.json (overrides DAEMON_BRIDGE_CONFIG)",
)
@click.pass_context
def cli(ctx: click.Context, version: bool, config_path: Path | None) -> None:
    """daemon-bridge: Authenticated proxy between a game panel and node daemons."""
    if version:
        click.echo(f"daemon-bridge {__version__}")
        sys.exit(0)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# Register commands
cli.add_command(config)
cli.add_command(nodes)
cli.add_command(serve)
cli.add_command(status)
cli.add_command(ls)
cli.add_command(cat)
cli.add_command(save)


def main() -> None:
    """Entry point for the daemon-bridge command."""
    cli()
