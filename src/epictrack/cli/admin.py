from __future__ import annotations

import os
import subprocess

import click

from epictrack.config import ensure_config, get_config


@click.command()
@click.option("--edit", is_flag=True, help="Open config in $EDITOR.")
@click.pass_context
def config(ctx: click.Context, edit: bool) -> None:
    """Show the config file and the data file in use, or edit the config."""
    config_path = ensure_config()

    if edit:
        editor = os.environ.get("EDITOR", "vi")
        subprocess.run([editor, str(config_path)])
        return

    db_path = (ctx.find_root().obj or {}).get("db_path") or get_config().data_file
    click.echo(f"Config file: {config_path}")
    click.echo(f"Data file: {db_path}")
    click.echo()
    click.echo(config_path.read_text(encoding="utf-8"))
