"""Tests for screen rendering and input interpretation."""

import pytest
import typer

from epicat.models import (
    CreateEpic,
    CreateStory,
    DeleteEpic,
    DeleteStory,
    Epic,
    Exit,
    NavigateToEpicDetail,
    NavigateToPreviousPage,
    NavigateToStoryDetail,
    Status,
    Story,
    UpdateEpicStatus,
    UpdateStoryStatus,
)
from epicat.screens import (
    EpicScreen,
    HomeScreen,
    StoryScreen,
    interpret,
    parse_id,
    render,
)
from epicat.storage import EpicStore, NotFoundError


class TestParseId:
    """Test the ID token grammar."""

    @pytest.mark.parametrize(("token", "expected"), [("0", 0), ("3", 3), ("120", 120)])
    def test_digits(self, token: str, expected: int) -> None:
        """Plain decimal numbers are IDs."""
        assert parse_id(token) == expected

    @pytest.mark.parametrize("token", ["", "-1", "+3", "3a", "1.0", " 3", "３", "²"])
    def test_not_ids(self, token: str) -> None:
        """Anything but ASCII digits is rejected."""
        assert parse_id(token) is None

    def test_leading_zero_rejected_by_default(self) -> None:
        """'03' is not an ID unless leading zeros are allowed."""
        assert parse_id("03") is None
        assert parse_id("03", accept_leading_zeros=True) == 3

    def test_huge_number_is_not_an_id(self) -> None:
        """Digit strings too long for int() are rejected, not raised."""
        assert parse_id("9" * 5000) is None


class TestHomeScreen:
    """Test the epic list screen."""

    def test_render_empty(self, store: EpicStore) -> None:
        """The empty home screen shows headers and commands."""
        text = typer.unstyle(render(HomeScreen(), store))
        assert "EPICS" in text
        assert "[q] quit | [c] create epic | [:id:] navigate to epic" in text

    def test_render_lists_epics_sorted(self, store: EpicStore) -> None:
        """Epics are listed in ID order with their status."""
        store.create_epic(Epic(name="first"))
        second = store.create_epic(Epic(name="second"))
        store.update_epic_status(second, Status.IN_PROGRESS)

        lines = typer.unstyle(render(HomeScreen(), store)).splitlines()
        rows = [line for line in lines if line.startswith(("1 ", "2 "))]
        assert rows[0].startswith("1".ljust(11) + " | first")
        assert rows[1].startswith("2".ljust(11) + " | second")
        assert "IN PROGRESS" in rows[1]

    def test_render_truncates_long_names(self, store: EpicStore) -> None:
        """Names wider than the column end in an ellipsis."""
        store.create_epic(Epic(name="x" * 40))
        text = typer.unstyle(render(HomeScreen(), store))
        assert "x" * 29 + "..." in text
        assert "x" * 30 not in text

    def test_interpret(self, store: EpicStore) -> None:
        """Home commands map to actions; junk maps to nothing."""
        epic_id = store.create_epic(Epic(name=""))
        screen = HomeScreen()

        assert interpret(screen, "q", store) == Exit()
        assert interpret(screen, "c", store) == CreateEpic()
        assert interpret(screen, str(epic_id), store) == NavigateToEpicDetail(1)
        assert interpret(screen, "999", store) is None
        assert interpret(screen, "j983f2j", store) is None
        assert interpret(screen, "q983f2j", store) is None
        assert interpret(screen, "q\n", store) is None
        assert interpret(screen, "", store) is None

    def test_commands_are_case_sensitive(self, store: EpicStore) -> None:
        """Upper-case letters are not commands."""
        assert interpret(HomeScreen(), "Q", store) is None
        assert interpret(HomeScreen(), "C", store) is None

    def test_leading_zeros(self, store: EpicStore) -> None:
        """'03' only reaches epic 3 when leading zeros are accepted."""
        for name in ("a", "b", "c"):
            store.create_epic(Epic(name=name))

        assert interpret(HomeScreen(), "3", store) == NavigateToEpicDetail(3)
        assert interpret(HomeScreen(), "03", store) is None
        assert interpret(
            HomeScreen(),
            "03",
            store,
            accept_leading_zeros=True,
        ) == NavigateToEpicDetail(3)

    def test_story_id_is_not_an_epic(self, store: EpicStore) -> None:
        """Only epic IDs navigate from home."""
        epic_id = store.create_epic(Epic(name="e"))
        story_id = store.create_story(Story(name="s"), epic_id)
        assert interpret(HomeScreen(), str(story_id), store) is None

    def test_huge_number_is_ignored(self, store: EpicStore) -> None:
        """A pasted run of digits yields no action."""
        store.create_epic(Epic(name="e"))
        assert interpret(HomeScreen(), "9" * 5000, store) is None


class TestEpicScreen:
    """Test the epic detail screen."""

    def test_render(self, store: EpicStore) -> None:
        """The epic's fields and its stories are shown."""
        epic_id = store.create_epic(Epic(name="Epic name", description="About it"))
        store.create_story(Story(name="Story one"), epic_id)

        text = typer.unstyle(render(EpicScreen(epic_id), store))
        assert "EPIC" in text
        assert "STORIES" in text
        assert "1".ljust(5) + " | " + "Epic name".ljust(12) + " | About it" in text
        assert "2".ljust(11) + " | Story one" in text
        assert "[p] previous | [u] update epic | [d] delete epic" in text

    def test_render_stories_sorted(self, store: EpicStore) -> None:
        """Stories are listed by ID."""
        epic_id = store.create_epic(Epic(name="e"))
        for name in ("s-a", "s-b", "s-c"):
            store.create_story(Story(name=name), epic_id)

        text = typer.unstyle(render(EpicScreen(epic_id), store))
        assert text.index("s-a") < text.index("s-b") < text.index("s-c")

    def test_render_missing_epic_fails(self, store: EpicStore) -> None:
        """A deleted epic cannot be rendered."""
        with pytest.raises(NotFoundError):
            render(EpicScreen(999), store)

    def test_interpret(self, store: EpicStore) -> None:
        """Epic commands map to actions for this epic."""
        epic_id = store.create_epic(Epic(name=""))
        story_id = store.create_story(Story(name=""), epic_id)
        screen = EpicScreen(epic_id)

        assert interpret(screen, "p", store) == NavigateToPreviousPage()
        assert interpret(screen, "u", store) == UpdateEpicStatus(1)
        assert interpret(screen, "d", store) == DeleteEpic(1)
        assert interpret(screen, "c", store) == CreateStory(1)
        assert interpret(screen, str(story_id), store) == NavigateToStoryDetail(1, 2)
        assert interpret(screen, "999", store) is None
        assert interpret(screen, "j983f2j", store) is None
        assert interpret(screen, "p983f2j", store) is None
        assert interpret(screen, "p\n", store) is None
        assert interpret(screen, "q", store) is None

    def test_any_live_story_navigates(self, store: EpicStore) -> None:
        """Story IDs are checked against all stories, not just this epic's."""
        first = store.create_epic(Epic(name="a"))
        second = store.create_epic(Epic(name="b"))
        other_story = store.create_story(Story(name="s"), second)

        action = interpret(EpicScreen(first), str(other_story), store)
        assert action == NavigateToStoryDetail(first, other_story)


class TestStoryScreen:
    """Test the story detail screen."""

    def test_render(self, store: EpicStore) -> None:
        """The story's fields are shown."""
        epic_id = store.create_epic(Epic(name=""))
        story_id = store.create_story(
            Story(name="A story", description="Details", status=Status.RESOLVED),
            epic_id,
        )

        text = typer.unstyle(render(StoryScreen(epic_id, story_id), store))
        assert "STORY" in text
        assert "2".ljust(5) + " | " + "A story".ljust(12) + " | Details" in text
        assert "RESOLVED" in text
        assert "[p] previous | [u] update story | [d] delete story" in text

    def test_render_missing_story_fails(self, store: EpicStore) -> None:
        """A deleted story cannot be rendered."""
        epic_id = store.create_epic(Epic(name=""))
        store.create_story(Story(name=""), epic_id)

        with pytest.raises(NotFoundError):
            render(StoryScreen(epic_id, 999), store)

    def test_interpret(self, store: EpicStore) -> None:
        """Story commands map to actions; numbers do nothing here."""
        epic_id = store.create_epic(Epic(name=""))
        story_id = store.create_story(Story(name=""), epic_id)
        screen = StoryScreen(epic_id, story_id)

        assert interpret(screen, "p", store) == NavigateToPreviousPage()
        assert interpret(screen, "u", store) == UpdateStoryStatus(story_id)
        assert interpret(screen, "d", store) == DeleteStory(epic_id, story_id)
        assert interpret(screen, "1", store) is None
        assert interpret(screen, "j983f2j", store) is None
        assert interpret(screen, "p983f2j", store) is None
        assert interpret(screen, "p\n", store) is None
        assert interpret(screen, "c", store) is None
