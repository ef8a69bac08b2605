from __future__ import annotations

import pytest

from epictrack.db import NotFoundError
from epictrack.models import (
    CloseEpic,
    CreateEpic,
    CreateStory,
    DeleteEpic,
    DeleteStory,
    Epic,
    Exit,
    GetEpicDescription,
    GetEpicName,
    GetStoryDescription,
    GetStoryName,
    NavigateToEpicDetail,
    NavigateToPreviousPage,
    NavigateToStoryDetail,
    ReopenEpic,
    Story,
    UpdateStoryStatus,
)
from epictrack.ui.pages import EpicDetail, HomePage, StoryDetail

JUNK = ["", "j983f2j", "q983f2j", "p983f2j", "q\n", "p\n", " p", "Q", "P", "-1", "1.0"]


@pytest.fixture
def epic_with_story(store):
    epic_id = store.create_epic(Epic.new("Checkout", "Payment flow"))
    story_id = store.create_story(Story.new("Card form", "Collect card"), epic_id)
    return epic_id, story_id


# -- HomePage --


def test_home_render_lists_epics_sorted(store):
    store.create_epic(Epic.new("First", ""))
    store.create_epic(Epic.new("Second", ""))

    text = HomePage(store).render()
    assert "EPICS" in text
    assert text.index("First") < text.index("Second")
    assert "OPEN" in text
    assert "[q]uit | [c]reate epic | epic [:id:]" in text


def test_home_render_empty(store):
    assert "EPICS" in HomePage(store).render()


def test_home_parse_input(store, epic_with_story):
    epic_id, story_id = epic_with_story
    page = HomePage(store)

    assert page.parse_input("q") == Exit()
    assert page.parse_input("c") == CreateEpic()
    assert page.parse_input(str(epic_id)) == NavigateToEpicDetail(epic_id=epic_id)
    assert page.parse_input("999") is None
    # Story ids are not epics.
    assert page.parse_input(str(story_id)) is None
    for line in JUNK:
        assert page.parse_input(line) is None



def test_ids_accept_a_single_leading_plus(store, epic_with_story):
    epic_id, story_id = epic_with_story
    home = HomePage(store)
    assert home.parse_input(f"+{epic_id}") == NavigateToEpicDetail(epic_id=epic_id)
    assert home.parse_input("+") is None
    assert home.parse_input(f"++{epic_id}") is None
    assert home.parse_input(f"-{epic_id}") is None

    epic_page = EpicDetail(store, epic_id)
    assert epic_page.parse_input(f"+{story_id}") == NavigateToStoryDetail(
        epic_id=epic_id, story_id=story_id
    )


# -- EpicDetail --


def test_epic_render(store, epic_with_story):
    epic_id, _ = epic_with_story
    text = EpicDetail(store, epic_id).render()

    assert "EPIC" in text
    assert "STORIES" in text
    assert "Checkout" in text
    assert "Payment flow" in text
    assert "Card form" in text
    assert "[cr]eate story" in text


def test_epic_render_missing_epic(store):
    with pytest.raises(NotFoundError):
        EpicDetail(store, 999).render()


def test_epic_parse_input(store, epic_with_story):
    epic_id, story_id = epic_with_story
    page = EpicDetail(store, epic_id)

    assert page.parse_input("p") == NavigateToPreviousPage()
    assert page.parse_input("cl") == CloseEpic(epic_id=epic_id)
    assert page.parse_input("r") == ReopenEpic(epic_id=epic_id)
    assert page.parse_input("d") == DeleteEpic(epic_id=epic_id)
    assert page.parse_input("cr") == CreateStory(epic_id=epic_id)
    assert page.parse_input("en") == GetEpicName(epic_id=epic_id)
    assert page.parse_input("ed") == GetEpicDescription(epic_id=epic_id)
    assert page.parse_input(str(story_id)) == NavigateToStoryDetail(
        epic_id=epic_id, story_id=story_id
    )
    assert page.parse_input("999") is None
    for line in JUNK:
        assert page.parse_input(line) is None


def test_epic_parse_input_rejects_other_epics_story(store, epic_with_story):
    _, story_id = epic_with_story
    other = store.create_epic(Epic.new("Other", ""))
    assert EpicDetail(store, other).parse_input(str(story_id)) is None


def test_epic_parse_input_missing_epic(store):
    page = EpicDetail(store, 999)
    assert page.parse_input("1") is None
    assert page.parse_input("p") == NavigateToPreviousPage()


# -- StoryDetail --


def test_story_render(store, epic_with_story):
    epic_id, story_id = epic_with_story
    text = StoryDetail(store, epic_id, story_id).render()

    assert "STORY" in text
    assert "Card form" in text
    assert "Collect card" in text
    assert "[u]pdate story" in text


def test_story_render_missing_story(store, epic_with_story):
    epic_id, _ = epic_with_story
    with pytest.raises(NotFoundError):
        StoryDetail(store, epic_id, 999).render()


def test_story_render_truncates_long_fields(store, epic_with_story):
    epic_id, _ = epic_with_story
    story_id = store.create_story(Story.new("A very long story name", ""), epic_id)
    text = StoryDetail(store, epic_id, story_id).render()
    assert "A very lo..." in text
    assert "A very long story name" not in text


def test_story_parse_input(store, epic_with_story):
    epic_id, story_id = epic_with_story
    page = StoryDetail(store, epic_id, story_id)

    assert page.parse_input("p") == NavigateToPreviousPage()
    assert page.parse_input("u") == UpdateStoryStatus(
        epic_id=epic_id, story_id=story_id
    )
    assert page.parse_input("sn") == GetStoryName(story_id=story_id)
    assert page.parse_input("sd") == GetStoryDescription(story_id=story_id)
    assert page.parse_input("d") == DeleteStory(epic_id=epic_id, story_id=story_id)
    assert page.parse_input("1") is None
    for line in JUNK:
        assert page.parse_input(line) is None
