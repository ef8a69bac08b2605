from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from epictrack.cli.admin import config
from epictrack.cli.board import board
from epictrack.cli.info import list_cmd, status


@click.group(invoke_without_command=True)
@click.option(
    "--db",
    "db_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Data file to use instead of the configured one.",
)
@click.option("--debug", is_flag=True, help="Log debug output to stderr.")
@click.pass_context
def cli(ctx: click.Context, db_path: Path | None, debug: bool) -> None:
    """epictrack — terminal tracker for epics and stories."""
    if debug:
        logging.basicConfig(
            level=logging.DEBUG, format="%(name)s %(message)s", stream=sys.stderr
        )
    ctx.obj = {"db_path": db_path.expanduser() if db_path else None}
    if ctx.invoked_subcommand is None:
        ctx.invoke(board)


# Register board and info commands
cli.add_command(board)
cli.add_command(list_cmd)
cli.add_command(status)

# Register admin commands
cli.add_command(config)

__all__ = ["cli"]
