"""Interactive prompts used by the navigator.

The navigator only calls the callables held by a Prompts instance, so tests
swap in canned answers instead of reading from the terminal.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

import click

from epictrack.models import Epic, Status, Story

SEPARATOR = "-" * 29

T = TypeVar("T")

_STATUS_CHOICES = {
    "p": Status.IN_PROGRESS,
    "c": Status.CLOSED,
    "r": Status.RESOLVED,
}


def _ask_choice(question: str, choices: dict[str, T]) -> T:
    """Ask until the answer is one of ``choices`` (case-insensitive)."""
    while True:
        answer = click.prompt(question, default="", show_default=False)
        key = answer.strip().lower()
        if key in choices:
            return choices[key]
        click.echo("Invalid input! Please try again.")


def _confirm(question: str) -> bool:
    click.echo(SEPARATOR)
    return _ask_choice(f"{question} (Y/n)", {"y": True, "n": False})


def create_epic_prompt() -> Epic:
    click.echo(SEPARATOR)
    name = click.prompt("Epic Name", default="", show_default=False)
    description = click.prompt("Epic Description", default="", show_default=False)
    return Epic.new(name.strip(), description.strip())


def create_story_prompt() -> Story:
    click.echo(SEPARATOR)
    name = click.prompt("Story Name", default="", show_default=False)
    description = click.prompt("Story Description", default="", show_default=False)
    return Story.new(name.strip(), description.strip())


def close_epic_prompt() -> bool:
    return _confirm("Are you sure you want to close this epic?")


def reopen_epic_prompt() -> bool:
    return _confirm("Are you sure you want to reopen this epic?")


def delete_epic_prompt() -> bool:
    return _confirm(
        "Are you sure you want to delete this epic? "
        "All stories in this epic will also be deleted"
    )


def delete_story_prompt() -> bool:
    return _confirm("Are you sure you want to delete this story?")


def update_status_prompt() -> Status:
    click.echo(SEPARATOR)
    return _ask_choice(
        "Please enter new status. (In [P]rogress/[C]losed/[R]esolved)",
        _STATUS_CHOICES,
    )


def wait_for_enter() -> None:
    click.prompt(
        "Press Enter to continue...", default="", show_default=False, prompt_suffix=""
    )


def show_message(text: str) -> None:
    click.echo(text)
    wait_for_enter()


@dataclass
class Prompts:
    create_epic: Callable[[], Epic] = create_epic_prompt
    create_story: Callable[[], Story] = create_story_prompt
    close_epic: Callable[[], bool] = close_epic_prompt
    reopen_epic: Callable[[], bool] = reopen_epic_prompt
    delete_epic: Callable[[], bool] = delete_epic_prompt
    delete_story: Callable[[], bool] = delete_story_prompt
    update_status: Callable[[], Status] = update_status_prompt
    show_message: Callable[[str], None] = show_message
