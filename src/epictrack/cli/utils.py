from __future__ import annotations

from pathlib import Path

import click

from epictrack.db import Store, get_store


def _store_from_context(ctx: click.Context) -> Store:
    """Build the store from the top-level --db option, or the config default."""
    db_path: Path | None = (ctx.find_root().obj or {}).get("db_path")
    return get_store(db_path)
