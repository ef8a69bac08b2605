from __future__ import annotations

import click

from epictrack.db import StoreError
from epictrack.models import Status

from epictrack.cli.utils import _store_from_context


@click.command("list")
@click.pass_context
def list_cmd(ctx: click.Context) -> None:
    """List epics and their stories."""
    store = _store_from_context(ctx)
    try:
        state = store.read_state()
    except StoreError as e:
        raise click.ClickException(str(e))

    if not state.epics:
        click.echo("No epics found.")
        return

    click.echo(f"{'ID':>4}  {'Status':<12}  {'Name'}")
    click.echo("-" * 60)
    for epic_id in sorted(state.epics):
        epic = state.epics[epic_id]
        click.echo(f"{epic_id:>4}  {epic.status.label:<12}  {epic.name}")
        for story_id in epic.stories:
            story = state.stories[story_id]
            click.echo(f"{story_id:>8}  {story.status.label:<12}  {story.name}")


@click.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show story counts per status."""
    store = _store_from_context(ctx)
    try:
        state = store.read_state()
    except StoreError as e:
        raise click.ClickException(str(e))

    counts = {s: 0 for s in Status}
    for story in state.stories.values():
        counts[story.status] += 1

    summary = "  ".join(f"{s.label.lower()}: {n}" for s, n in counts.items())
    click.echo(f"Epics: {len(state.epics)}  |  Stories: {len(state.stories)}  |  {summary}")
