"""Page stack and action dispatch for the interactive board."""

from __future__ import annotations

import logging
from collections.abc import Callable

from epictrack.db import Store
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
    Status,
    UpdateStoryStatus,
)
from epictrack.ui.pages import EpicDetail, HomePage, Page, StoryDetail
from epictrack.ui.prompts import Prompts

logger = logging.getLogger(__name__)


class Navigator:
    """Owns the page history and applies Actions to it and to the store.

    The last page in ``pages`` is the one on screen. An empty stack means the
    session is over.
    """

    def __init__(self, store: Store, prompts: Prompts | None = None) -> None:
        self.store = store
        self.prompts = prompts or Prompts()
        self.pages: list[Page] = [HomePage(store)]
        self._handlers: dict[type, Callable] = {
            NavigateToEpicDetail: self._navigate_to_epic,
            NavigateToStoryDetail: self._navigate_to_story,
            NavigateToPreviousPage: self._navigate_back,
            GetEpicName: self._show_epic_name,
            GetEpicDescription: self._show_epic_description,
            GetStoryName: self._show_story_name,
            GetStoryDescription: self._show_story_description,
            CreateEpic: self._create_epic,
            CloseEpic: self._close_epic,
            ReopenEpic: self._reopen_epic,
            DeleteEpic: self._delete_epic,
            CreateStory: self._create_story,
            UpdateStoryStatus: self._update_story_status,
            DeleteStory: self._delete_story,
            Exit: self._exit,
        }

    def get_current_page(self) -> Page | None:
        return self.pages[-1] if self.pages else None

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def handle_action(self, action: Action) -> None:
        """Apply one action. Store failures propagate to the caller."""
        logger.debug("handling %r with %d pages", action, len(self.pages))
        self._handlers[type(action)](action)

    # -- Navigation --

    def _navigate_to_epic(self, action: NavigateToEpicDetail) -> None:
        self.pages.append(EpicDetail(self.store, action.epic_id))

    def _navigate_to_story(self, action: NavigateToStoryDetail) -> None:
        self.pages.append(StoryDetail(self.store, action.epic_id, action.story_id))

    def _navigate_back(self, action: NavigateToPreviousPage) -> None:
        if self.pages:
            self.pages.pop()

    def _exit(self, action: Exit) -> None:
        self.pages.clear()

    # -- Read-only --

    def _show_epic_name(self, action: GetEpicName) -> None:
        epic = self.store.get_epic(action.epic_id)
        self.prompts.show_message(f"Name: {epic.name}")

    def _show_epic_description(self, action: GetEpicDescription) -> None:
        epic = self.store.get_epic(action.epic_id)
        self.prompts.show_message(f"Description: {epic.description}")

    def _show_story_name(self, action: GetStoryName) -> None:
        story = self.store.get_story(action.story_id)
        self.prompts.show_message(f"Name: {story.name}")

    def _show_story_description(self, action: GetStoryDescription) -> None:
        story = self.store.get_story(action.story_id)
        self.prompts.show_message(f"Description: {story.description}")

    # -- Mutations --

    def _create_epic(self, action: CreateEpic) -> None:
        epic = self.prompts.create_epic()
        epic_id = self.store.create_epic(epic)
        self.prompts.show_message(f"Epic #{epic_id} was created!")

    def _create_story(self, action: CreateStory) -> None:
        story = self.prompts.create_story()
        story_id = self.store.create_story(story, action.epic_id)
        self.prompts.show_message(f"Story #{story_id} was created!")

    def _close_epic(self, action: CloseEpic) -> None:
        if not self.prompts.close_epic():
            self.prompts.show_message("Cancelled!")
            return
        self.store.close_epic(action.epic_id)
        self.prompts.show_message("Epic was closed!")

    def _reopen_epic(self, action: ReopenEpic) -> None:
        if not self.prompts.reopen_epic():
            self.prompts.show_message("Cancelled!")
            return
        self.store.update_epic_status(action.epic_id, reopen=True)
        self.prompts.show_message("Epic was reopened!")

    def _delete_epic(self, action: DeleteEpic) -> None:
        if not self.prompts.delete_epic():
            self.prompts.show_message("Cancelled!")
            return
        self.store.delete_epic(action.epic_id)
        self.prompts.show_message("Epic and attached stories were removed!")
        self._navigate_back(NavigateToPreviousPage())

    def _delete_story(self, action: DeleteStory) -> None:
        if not self.prompts.delete_story():
            self.prompts.show_message("Cancelled!")
            return
        self.store.delete_story(action.epic_id, action.story_id)
        self.prompts.show_message("Story successfully deleted!")
        self._navigate_back(NavigateToPreviousPage())

    def _update_story_status(self, action: UpdateStoryStatus) -> None:
        # Stories of a closed epic are frozen; the store itself does not check.
        if self.store.get_epic(action.epic_id).status is Status.CLOSED:
            self.prompts.show_message(
                "Cannot change the status of a Story from a closed Epic!"
            )
            return
        status = self.prompts.update_status()
        self.store.update_story_status(action.story_id, status)
        self.prompts.show_message("Story status updated successfully!")
