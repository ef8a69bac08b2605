from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Any, Protocol

from epictrack.config import get_config
from epictrack.models import Epic, RepositoryState, Status, Story, rollup

logger = logging.getLogger(__name__)

DATA_FILE_NAME = "db.json"


# -- Exceptions --


class StoreError(Exception):
    """Base class for every failure raised by the store."""


class NotFoundError(StoreError):
    """Raised when an epic or story id does not exist."""

    def __init__(self, kind: str, item_id: int, detail: str | None = None) -> None:
        self.kind = kind
        self.item_id = item_id
        msg = f"{kind} #{item_id} not found"
        if detail:
            msg += f" {detail}"
        super().__init__(msg + ".")


class StoreIOError(StoreError):
    """Raised when the backing file cannot be read or written."""

    def __init__(self, path: Path, action: str) -> None:
        self.path = path
        super().__init__(f"Failed to {action} {path}.")


class StoreParseError(StoreError):
    """Raised when the backing file content is malformed."""


# -- JSON codec --


def state_to_dict(state: RepositoryState) -> dict[str, Any]:
    return {
        "last_item_id": state.last_item_id,
        "epics": {
            str(epic_id): {
                "name": epic.name,
                "description": epic.description,
                "stories": list(epic.stories),
                "status": epic.status.value,
            }
            for epic_id, epic in state.epics.items()
        },
        "stories": {
            str(story_id): {
                "name": story.name,
                "description": story.description,
                "status": story.status.value,
            }
            for story_id, story in state.stories.items()
        },
    }


def state_from_dict(data: Any) -> RepositoryState:
    """Build a RepositoryState from decoded JSON, validating its shape."""
    try:
        state = RepositoryState(
            last_item_id=int(data["last_item_id"]),
            epics={
                int(key): Epic(
                    name=str(value["name"]),
                    description=str(value["description"]),
                    status=Status(value["status"]),
                    stories=[int(story_id) for story_id in value["stories"]],
                )
                for key, value in data["epics"].items()
            },
            stories={
                int(key): Story(
                    name=str(value["name"]),
                    description=str(value["description"]),
                    status=Status(value["status"]),
                )
                for key, value in data["stories"].items()
            },
        )
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise StoreParseError(f"Malformed repository data: {exc}") from exc

    _validate_state(state)
    return state


def _validate_state(state: RepositoryState) -> None:
    """Check the shared id space and that each story has at most one epic."""
    shared = sorted(set(state.epics) & set(state.stories))
    if shared:
        raise StoreParseError(f"Id #{shared[0]} is used by both an epic and a story.")

    owners: dict[int, int] = {}
    for epic_id, epic in state.epics.items():
        for story_id in epic.stories:
            if story_id not in state.stories:
                raise StoreParseError(
                    f"Epic #{epic_id} references missing story #{story_id}."
                )
            if story_id in owners:
                raise StoreParseError(
                    f"Story #{story_id} is listed by epics "
                    f"#{owners[story_id]} and #{epic_id}."
                )
            owners[story_id] = epic_id

    used_ids = set(state.epics) | set(state.stories)
    if used_ids and max(used_ids) > state.last_item_id:
        raise StoreParseError(
            f"last_item_id {state.last_item_id} is behind existing id {max(used_ids)}."
        )


# -- Backends --


class Database(Protocol):
    def read_state(self) -> RepositoryState: ...

    def write_state(self, state: RepositoryState) -> None: ...


class JsonFileDatabase:
    """Whole-state JSON file, read and rewritten on every call."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def read_state(self) -> RepositoryState:
        if not self.path.exists():
            return RepositoryState()
        try:
            raw = self.path.read_bytes()
        except OSError as exc:
            raise StoreIOError(self.path, "read") from exc
        try:
            data = json.loads(raw.decode("utf-8"))
        except UnicodeDecodeError as exc:
            raise StoreParseError(f"{self.path} is not UTF-8 text: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise StoreParseError(f"Invalid JSON in {self.path}: {exc}") from exc
        return state_from_dict(data)

    def write_state(self, state: RepositoryState) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                json.dumps(state_to_dict(state), indent=2) + "\n", encoding="utf-8"
            )
        except OSError as exc:
            raise StoreIOError(self.path, "write") from exc
        logger.debug("wrote %s (last_item_id=%d)", self.path, state.last_item_id)


class MemoryDatabase:
    """In-process backend holding a private copy of the state."""

    def __init__(self, state: RepositoryState | None = None) -> None:
        self._state = copy.deepcopy(state) if state else RepositoryState()

    def read_state(self) -> RepositoryState:
        return copy.deepcopy(self._state)

    def write_state(self, state: RepositoryState) -> None:
        self._state = copy.deepcopy(state)


# -- Store --


def _epic_or_raise(state: RepositoryState, epic_id: int) -> Epic:
    epic = state.epics.get(epic_id)
    if epic is None:
        raise NotFoundError("Epic", epic_id)
    return epic


def _story_or_raise(state: RepositoryState, story_id: int) -> Story:
    story = state.stories.get(story_id)
    if story is None:
        raise NotFoundError("Story", story_id)
    return story


def _refresh_epic_status(state: RepositoryState, epic_id: int) -> None:
    epic = state.epics[epic_id]
    epic.status = rollup(epic, state.stories)


class Store:
    """Mutation authority for epics and stories.

    Every operation reads the current state from the backend, applies its
    change, and writes the whole state back before returning.
    """

    def __init__(self, database: Database) -> None:
        self.database = database

    def read_state(self) -> RepositoryState:
        return self.database.read_state()

    def _write(self, state: RepositoryState) -> None:
        self.database.write_state(state)

    def get_epic(self, epic_id: int) -> Epic:
        return _epic_or_raise(self.read_state(), epic_id)

    def get_story(self, story_id: int) -> Story:
        return _story_or_raise(self.read_state(), story_id)

    def create_epic(self, epic: Epic) -> int:
        state = self.read_state()
        epic_id = state.next_id()
        state.epics[epic_id] = Epic(
            name=epic.name, description=epic.description, status=Status.OPEN
        )
        self._write(state)
        logger.debug("created epic #%d", epic_id)
        return epic_id

    def create_story(self, story: Story, epic_id: int) -> int:
        state = self.read_state()
        epic = _epic_or_raise(state, epic_id)
        story_id = state.next_id()
        state.stories[story_id] = Story(
            name=story.name, description=story.description, status=Status.OPEN
        )
        epic.stories.append(story_id)
        _refresh_epic_status(state, epic_id)
        self._write(state)
        logger.debug("created story #%d in epic #%d", story_id, epic_id)
        return story_id

    def update_story_status(self, story_id: int, status: Status) -> None:
        state = self.read_state()
        story = _story_or_raise(state, story_id)
        story.status = status
        owner_id = state.owner_of(story_id)
        if owner_id is not None:
            _refresh_epic_status(state, owner_id)
        self._write(state)
        logger.debug("story #%d status -> %s", story_id, status.value)

    def close_epic(self, epic_id: int) -> None:
        state = self.read_state()
        _epic_or_raise(state, epic_id).status = Status.CLOSED
        self._write(state)

    def update_epic_status(self, epic_id: int, reopen: bool = False) -> None:
        """Recompute an epic's status from its stories.

        With ``reopen`` the status is reset to Open first, so a mixed set of
        stories does not leave a closed epic closed.
        """
        state = self.read_state()
        epic = _epic_or_raise(state, epic_id)
        if reopen:
            epic.status = Status.OPEN
        _refresh_epic_status(state, epic_id)
        self._write(state)
        logger.debug("epic #%d status -> %s", epic_id, epic.status.value)

    def delete_epic(self, epic_id: int) -> None:
        state = self.read_state()
        epic = _epic_or_raise(state, epic_id)
        for story_id in epic.stories:
            state.stories.pop(story_id, None)
        del state.epics[epic_id]
        self._write(state)
        logger.debug("deleted epic #%d and %d stories", epic_id, len(epic.stories))

    def delete_story(self, epic_id: int, story_id: int) -> None:
        state = self.read_state()
        epic = _epic_or_raise(state, epic_id)
        _story_or_raise(state, story_id)
        if story_id not in epic.stories:
            raise NotFoundError("Story", story_id, f"in Epic #{epic_id}")
        epic.stories.remove(story_id)
        del state.stories[story_id]
        _refresh_epic_status(state, epic_id)
        self._write(state)
        logger.debug("deleted story #%d from epic #%d", story_id, epic_id)


def get_store(db_path: Path | None = None) -> Store:
    if db_path is None:
        db_path = get_config().data_file
    return Store(JsonFileDatabase(db_path))
