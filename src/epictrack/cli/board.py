"""The interactive entry loop: render, read one line, dispatch, repeat."""

from __future__ import annotations

import logging

import click
from rich.console import Console
from rich.text import Text

from epictrack.config import get_config
from epictrack.db import Store, StoreError
from epictrack.navigator import Navigator
from epictrack.ui.prompts import Prompts, wait_for_enter

from epictrack.cli.utils import _store_from_context

logger = logging.getLogger(__name__)


def _read_command() -> str:
    return click.prompt("", default="", show_default=False, prompt_suffix="").strip()


def _error_banner(console: Console, message: str) -> None:
    console.print(Text(message, style="bold red"))
    wait_for_enter()


def run_board(
    store: Store,
    prompts: Prompts | None = None,
    clear_screen: bool = True,
    console: Console | None = None,
) -> None:
    """Drive the navigator until its page stack is empty."""
    console = console or Console(highlight=False)
    nav = Navigator(store, prompts)

    while True:
        page = nav.get_current_page()
        if page is None:
            break

        if clear_screen:
            console.clear()

        try:
            console.print(page.render(), markup=False, emoji=False, soft_wrap=True)
        except StoreError as e:
            _error_banner(console, f"Error rendering page: {e}")

        line = _read_command()

        try:
            action = page.parse_input(line)
        except StoreError as e:
            _error_banner(console, f"Error handling input: {e}")
            continue
        if action is None:
            continue

        try:
            nav.handle_action(action)
        except StoreError as e:
            logger.debug("action %r failed", action, exc_info=True)
            _error_banner(console, f"Error occurred handling action: {e}")


@click.command()
@click.pass_context
def board(ctx: click.Context) -> None:
    """Open the interactive epic/story board."""
    store = _store_from_context(ctx)
    run_board(store, clear_screen=get_config().clear_screen)
