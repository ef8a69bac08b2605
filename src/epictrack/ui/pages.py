"""Pages of the interactive board.

Each page draws itself from the store and turns one raw input line into an
Action, or None when the line is not one of its commands.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from epictrack.db import NotFoundError, Store
from epictrack.models import (
    Action,
    CloseEpic,
    CreateEpic,
    CreateStory,
    DeleteEpic,
    DeleteStory,
    Exit,
    GetEpicDescription,
    GetEpicName,
    GetStoryDescription,
    GetStoryName,
    NavigateToEpicDetail,
    NavigateToPreviousPage,
    NavigateToStoryDetail,
    ReopenEpic,
    UpdateStoryStatus,
)
from epictrack.ui.formatting import get_column_string


def _parse_id(line: str) -> int | None:
    """Parse a plain ASCII id, allowing one leading plus sign."""
    digits = line[1:] if line.startswith("+") else line
    if digits and digits.isascii() and digits.isdigit():
        return int(digits)
    return None


def _banner(title: str, width: int = 65) -> str:
    return f" {title} ".center(width, "-")


class Page(ABC):
    def __init__(self, store: Store) -> None:
        self.store = store

    @abstractmethod
    def render(self) -> str:
        """Return the text of this page."""

    @abstractmethod
    def parse_input(self, line: str) -> Action | None:
        """Map a raw input line to an Action."""


class HomePage(Page):
    def render(self) -> str:
        state = self.store.read_state()
        lines = [
            _banner("EPICS"),
            "     id     |               name               |      status      ",
        ]
        for epic_id in sorted(state.epics):
            epic = state.epics[epic_id]
            lines.append(
                f"{get_column_string(str(epic_id), 11)} | "
                f"{get_column_string(epic.name, 32)} | "
                f"{get_column_string(epic.status.label, 17)}"
            )
        lines += ["", "", "[q]uit | [c]reate epic | epic [:id:]"]
        return "\n".join(lines)

    def parse_input(self, line: str) -> Action | None:
        if line == "q":
            return Exit()
        if line == "c":
            return CreateEpic()
        epic_id = _parse_id(line)
        if epic_id is not None and epic_id in self.store.read_state().epics:
            return NavigateToEpicDetail(epic_id=epic_id)
        return None


class EpicDetail(Page):
    def __init__(self, store: Store, epic_id: int) -> None:
        super().__init__(store)
        self.epic_id = epic_id

    def render(self) -> str:
        state = self.store.read_state()
        epic = state.epics.get(self.epic_id)
        if epic is None:
            raise NotFoundError("Epic", self.epic_id)

        lines = [
            _banner("EPIC"),
            "  id  |     name     |         description         |    status    ",
            f"{get_column_string(str(self.epic_id), 5)} | "
            f"{get_column_string(epic.name, 12)} | "
            f"{get_column_string(epic.description, 27)} | "
            f"{get_column_string(epic.status.label, 13)}",
            "",
            _banner("STORIES"),
            "     id     |               name               |      status      ",
        ]
        for story_id in epic.stories:
            story = state.stories[story_id]
            lines.append(
                f"{get_column_string(str(story_id), 11)} | "
                f"{get_column_string(story.name, 32)} | "
                f"{get_column_string(story.status.label, 17)}"
            )
        lines += [
            "",
            "",
            "[p]revious | [cl]ose epic | [r]eopen epic | [d]elete epic | "
            "[cr]eate story | [e]pic [n]ame | [e]pic [d]escription | story [:id:]",
        ]
        return "\n".join(lines)

    def parse_input(self, line: str) -> Action | None:
        simple: dict[str, Action] = {
            "p": NavigateToPreviousPage(),
            "cl": CloseEpic(epic_id=self.epic_id),
            "r": ReopenEpic(epic_id=self.epic_id),
            "d": DeleteEpic(epic_id=self.epic_id),
            "cr": CreateStory(epic_id=self.epic_id),
            "en": GetEpicName(epic_id=self.epic_id),
            "ed": GetEpicDescription(epic_id=self.epic_id),
        }
        if line in simple:
            return simple[line]

        story_id = _parse_id(line)
        if story_id is None:
            return None
        epic = self.store.read_state().epics.get(self.epic_id)
        if epic is None or story_id not in epic.stories:
            return None
        return NavigateToStoryDetail(epic_id=self.epic_id, story_id=story_id)


class StoryDetail(Page):
    def __init__(self, store: Store, epic_id: int, story_id: int) -> None:
        super().__init__(store)
        self.epic_id = epic_id
        self.story_id = story_id

    def render(self) -> str:
        story = self.store.read_state().stories.get(self.story_id)
        if story is None:
            raise NotFoundError("Story", self.story_id)

        lines = [
            _banner("STORY"),
            "  id  |     name     |         description         |    status    ",
            f"{get_column_string(str(self.story_id), 5)} | "
            f"{get_column_string(story.name, 12)} | "
            f"{get_column_string(story.description, 27)} | "
            f"{get_column_string(story.status.label, 13)}",
            "",
            "",
            "[p]revious | [u]pdate story | [s]tory [n]ame | "
            "[s]tory [d]escription | [d]elete story",
        ]
        return "\n".join(lines)

    def parse_input(self, line: str) -> Action | None:
        actions: dict[str, Action] = {
            "p": NavigateToPreviousPage(),
            "u": UpdateStoryStatus(epic_id=self.epic_id, story_id=self.story_id),
            "sn": GetStoryName(story_id=self.story_id),
            "sd": GetStoryDescription(story_id=self.story_id),
            "d": DeleteStory(epic_id=self.epic_id, story_id=self.story_id),
        }
        return actions.get(line)
