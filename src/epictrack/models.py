from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum


class Status(str, Enum):
    OPEN = "Open"
    IN_PROGRESS = "InProgress"
    RESOLVED = "Resolved"
    CLOSED = "Closed"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]

    def __str__(self) -> str:
        return self.label


_STATUS_LABELS = {
    Status.OPEN: "OPEN",
    Status.IN_PROGRESS: "IN PROGRESS",
    Status.RESOLVED: "RESOLVED",
    Status.CLOSED: "CLOSED",
}


@dataclass
class Story:
    name: str
    description: str
    status: Status = Status.OPEN

    @classmethod
    def new(cls, name: str, description: str) -> Story:
        return cls(name=name, description=description, status=Status.OPEN)


@dataclass
class Epic:
    name: str
    description: str
    status: Status = Status.OPEN
    stories: list[int] = field(default_factory=list)  # story ids, not owned

    @classmethod
    def new(cls, name: str, description: str) -> Epic:
        return cls(name=name, description=description, status=Status.OPEN)


@dataclass
class RepositoryState:
    last_item_id: int = 0
    epics: dict[int, Epic] = field(default_factory=dict)
    stories: dict[int, Story] = field(default_factory=dict)

    def next_id(self) -> int:
        self.last_item_id += 1
        return self.last_item_id

    def owner_of(self, story_id: int) -> int | None:
        """Return the id of the epic listing ``story_id``, if any."""
        for epic_id, epic in self.epics.items():
            if story_id in epic.stories:
                return epic_id
        return None


def rollup(epic: Epic, stories: Mapping[int, Story]) -> Status:
    """Derive an epic's status from the statuses of its stories.

    A mix of stories that is neither all-done nor contains an in-progress
    story leaves the epic's current status untouched.
    """
    if not epic.stories:
        return Status.IN_PROGRESS

    closed_count = 0
    resolved_count = 0
    for story_id in epic.stories:
        status = stories[story_id].status
        if status is Status.IN_PROGRESS:
            return Status.IN_PROGRESS
        if status is Status.CLOSED:
            closed_count += 1
        elif status is Status.RESOLVED:
            resolved_count += 1

    total = len(epic.stories)
    if closed_count + resolved_count == total:
        return Status.RESOLVED
    if closed_count == total:
        return Status.CLOSED
    return epic.status


# -- Actions --


@dataclass(frozen=True)
class NavigateToEpicDetail:
    epic_id: int


@dataclass(frozen=True)
class NavigateToStoryDetail:
    epic_id: int
    story_id: int


@dataclass(frozen=True)
class NavigateToPreviousPage:
    pass


@dataclass(frozen=True)
class GetEpicName:
    epic_id: int


@dataclass(frozen=True)
class GetEpicDescription:
    epic_id: int


@dataclass(frozen=True)
class GetStoryName:
    story_id: int


@dataclass(frozen=True)
class GetStoryDescription:
    story_id: int


@dataclass(frozen=True)
class CreateEpic:
    pass


@dataclass(frozen=True)
class CloseEpic:
    epic_id: int


@dataclass(frozen=True)
class ReopenEpic:
    epic_id: int


@dataclass(frozen=True)
class DeleteEpic:
    epic_id: int


@dataclass(frozen=True)
class CreateStory:
    epic_id: int


@dataclass(frozen=True)
class UpdateStoryStatus:
    epic_id: int
    story_id: int


@dataclass(frozen=True)
class DeleteStory:
    epic_id: int
    story_id: int


@dataclass(frozen=True)
class Exit:
    pass


Action = (
    NavigateToEpicDetail
    | NavigateToStoryDetail
    | NavigateToPreviousPage
    | GetEpicName
    | GetEpicDescription
    | GetStoryName
    | GetStoryDescription
    | CreateEpic
    | CloseEpic
    | ReopenEpic
    | DeleteEpic
    | CreateStory
    | UpdateStoryStatus
    | DeleteStory
    | Exit
)
