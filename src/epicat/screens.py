"""Screens shown by the interactive browser.

A screen is one of three frozen dataclasses. ``render`` turns a screen into
text and ``interpret`` turns one line of operator input into an Action. The
store is always passed in by the caller; screens never hold it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from epicat.formatting import (
    chrome,
    format_menu,
    get_column_string,
    join_columns,
    style_status,
)
from epicat.models import (
    Action,
    CreateEpic,
    CreateStory,
    DeleteEpic,
    DeleteStory,
    Exit,
    NavigateToEpicDetail,
    NavigateToPreviousPage,
    NavigateToStoryDetail,
    UpdateEpicStatus,
    UpdateStoryStatus,
)
from epicat.storage import NotFoundError

if TYPE_CHECKING:
    from epicat.models import DBState, Status
    from epicat.storage import EpicStore


@dataclass(frozen=True)
class HomeScreen:
    """List of all epics."""


@dataclass(frozen=True)
class EpicScreen:
    """One epic and its stories."""

    epic_id: int


@dataclass(frozen=True)
class StoryScreen:
    """One story of an epic."""

    epic_id: int
    story_id: int


Screen = HomeScreen | EpicScreen | StoryScreen

_DIGITS = re.compile(r"[0-9]+")

# (id, name, status) column widths for list tables
_LIST_WIDTHS = (11, 32, 17)
# (id, name, description, status) column widths for detail tables
_DETAIL_WIDTHS = (5, 12, 27, 13)


def parse_id(token: str, *, accept_leading_zeros: bool = False) -> int | None:
    """Parse an ID token made of ASCII digits.

    Tokens with a leading zero ("03") are rejected unless
    *accept_leading_zeros* is set. "0" on its own is always accepted.

    Returns:
        The ID, or None if the token is not an ID.
    """
    if not _DIGITS.fullmatch(token):
        return None
    if not accept_leading_zeros and len(token) > 1 and token[0] == "0":
        return None
    try:
        return int(token)
    except ValueError:
        # Longer than int() will convert
        return None


def _list_row(item_id: int, name: str, status: Status) -> str:
    id_w, name_w, status_w = _LIST_WIDTHS
    return join_columns(
        get_column_string(str(item_id), id_w),
        get_column_string(name, name_w),
        style_status(status, get_column_string(status.label, status_w)),
    )


def _detail_row(item_id: int, name: str, description: str, status: Status) -> str:
    id_w, name_w, desc_w, status_w = _DETAIL_WIDTHS
    return join_columns(
        get_column_string(str(item_id), id_w),
        get_column_string(name, name_w),
        get_column_string(description, desc_w),
        style_status(status, get_column_string(status.label, status_w)),
    )


def _render_home(state: DBState) -> list[str]:
    lines = [
        chrome("----------------------------- EPICS -----------------------------"),
        chrome("     id     |               name               |      status      "),
    ]
    for epic_id in sorted(state.epics):
        epic = state.epics[epic_id]
        lines.append(_list_row(epic_id, epic.name, epic.status))
    lines += [
        "",
        "",
        format_menu(
            ("[q] quit", "red"),
            ("[c] create epic", "green"),
            ("[:id:] navigate to epic", "yellow"),
        ),
    ]
    return lines


def _render_epic(state: DBState, epic_id: int) -> list[str]:
    epic = state.epics.get(epic_id)
    if epic is None:
        raise NotFoundError("epic", epic_id)

    lines = [
        chrome("------------------------------ EPIC ------------------------------"),
        chrome("  id  |     name     |         description         |    status    "),
        _detail_row(epic_id, epic.name, epic.description, epic.status),
        "",
        chrome("---------------------------- STORIES ----------------------------"),
        chrome("     id     |               name               |      status      "),
    ]
    for story_id in sorted(epic.stories):
        story = state.stories.get(story_id)
        if story is None:
            raise NotFoundError("story", story_id)
        lines.append(_list_row(story_id, story.name, story.status))
    lines += [
        "",
        "",
        format_menu(
            ("[p] previous", "green"),
            ("[u] update epic", "yellow"),
            ("[d] delete epic", "red"),
            ("[c] create story", "blue"),
            ("[:id:] navigate to story", "magenta"),
        ),
    ]
    return lines


def _render_story(state: DBState, story_id: int) -> list[str]:
    story = state.stories.get(story_id)
    if story is None:
        raise NotFoundError("story", story_id)

    return [
        chrome("------------------------------ STORY ------------------------------"),
        chrome("  id  |     name     |         description         |    status     "),
        _detail_row(story_id, story.name, story.description, story.status),
        "",
        "",
        format_menu(
            ("[p] previous", "green"),
            ("[u] update story", "yellow"),
            ("[d] delete story", "red"),
        ),
    ]


def render(screen: Screen, store: EpicStore) -> str:
    """Render *screen* against the current contents of *store*.

    Raises:
        NotFoundError: If the epic or story the screen shows no longer exists.
    """
    state = store.load_state()
    if isinstance(screen, HomeScreen):
        lines = _render_home(state)
    elif isinstance(screen, EpicScreen):
        lines = _render_epic(state, screen.epic_id)
    else:
        lines = _render_story(state, screen.story_id)
    return "\n".join(lines)


def interpret(
    screen: Screen,
    text: str,
    store: EpicStore,
    *,
    accept_leading_zeros: bool = False,
) -> Action | None:
    """Map one line of input to an Action for *screen*.

    Matching is exact and case-sensitive; callers strip surrounding
    whitespace first. Unrecognised input returns None.
    """
    if isinstance(screen, StoryScreen):
        if text == "p":
            return NavigateToPreviousPage()
        if text == "u":
            return UpdateStoryStatus(screen.story_id)
        if text == "d":
            return DeleteStory(screen.epic_id, screen.story_id)
        return None

    if isinstance(screen, EpicScreen):
        if text == "p":
            return NavigateToPreviousPage()
        if text == "u":
            return UpdateEpicStatus(screen.epic_id)
        if text == "d":
            return DeleteEpic(screen.epic_id)
        if text == "c":
            return CreateStory(screen.epic_id)
        story_id = parse_id(text, accept_leading_zeros=accept_leading_zeros)
        # Any live story is accepted, not only this epic's
        if story_id is not None and story_id in store.load_state().stories:
            return NavigateToStoryDetail(screen.epic_id, story_id)
        return None

    if text == "q":
        return Exit()
    if text == "c":
        return CreateEpic()
    epic_id = parse_id(text, accept_leading_zeros=accept_leading_zeros)
    if epic_id is not None and epic_id in store.load_state().epics:
        return NavigateToEpicDetail(epic_id)
    return None
