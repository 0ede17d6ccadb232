"""Data models for epicat epics, stories and navigation actions."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from epicat.constants import MAX_ID


class Status(str, Enum):
    """Work item status enumeration.

    The value is the tag written to the database file.
    """

    OPEN = "Open"
    IN_PROGRESS = "InProgress"
    RESOLVED = "Resolved"
    CLOSED = "Closed"

    @property
    def label(self) -> str:
        """Human-readable label used on screens (e.g. 'IN PROGRESS')."""
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
    """A leaf work item, owned by exactly one epic."""

    name: str
    description: str = ""
    status: Status = Status.OPEN


@dataclass
class Epic:
    """A top-level work item owning an ordered list of story IDs."""

    name: str
    description: str = ""
    status: Status = Status.OPEN
    stories: list[int] = field(default_factory=list[int])


@dataclass
class DBState:
    """The complete persisted snapshot: ID counter plus both entity maps."""

    last_item_id: int = 0
    epics: dict[int, Epic] = field(default_factory=dict[int, Epic])
    stories: dict[int, Story] = field(default_factory=dict[int, Story])


def empty_state() -> DBState:
    """Return a fresh state with no items and the counter at zero."""
    return DBState()


# -- Actions ---------------------------------------------------------------


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
class CreateEpic:
    pass


@dataclass(frozen=True)
class CreateStory:
    epic_id: int


@dataclass(frozen=True)
class UpdateEpicStatus:
    epic_id: int


@dataclass(frozen=True)
class UpdateStoryStatus:
    story_id: int


@dataclass(frozen=True)
class DeleteEpic:
    epic_id: int


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
    | CreateEpic
    | CreateStory
    | UpdateEpicStatus
    | UpdateStoryStatus
    | DeleteEpic
    | DeleteStory
    | Exit
)


# -- Serialization ---------------------------------------------------------


def story_to_dict(story: Story) -> dict[str, Any]:
    """Convert a Story to its persisted dictionary form."""
    return {
        "name": story.name,
        "description": story.description,
        "status": story.status.value,
    }


def epic_to_dict(epic: Epic) -> dict[str, Any]:
    """Convert an Epic to its persisted dictionary form."""
    return {
        "name": epic.name,
        "description": epic.description,
        "status": epic.status.value,
        "stories": list(epic.stories),
    }


def state_to_dict(state: DBState) -> dict[str, Any]:
    """Convert the whole state to a JSON-ready dictionary.

    Map keys are written as decimal strings since JSON object keys must be
    strings.
    """
    return {
        "last_item_id": state.last_item_id,
        "epics": {str(k): epic_to_dict(v) for k, v in state.epics.items()},
        "stories": {str(k): story_to_dict(v) for k, v in state.stories.items()},
    }


def _require(data: dict[str, Any], key: str, kind: type, where: str) -> Any:
    if key not in data:
        msg = f"{where}: missing required field '{key}'"
        raise ValueError(msg)
    value = data[key]
    # bool is an int subclass; never accept it where a number is expected
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        msg = f"{where}: field '{key}' must be {kind.__name__}, got {type(value).__name__}"
        raise ValueError(msg)
    return value


def _parse_id(value: Any, where: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= MAX_ID:
        msg = f"{where}: expected a non-negative integer ID up to {MAX_ID}, got {value!r}"
        raise ValueError(msg)
    return value


def _parse_key(key: str, where: str) -> int:
    if not key.isascii() or not key.isdigit() or (len(key) > 1 and key[0] == "0"):
        msg = f"{where}: invalid ID key {key!r}"
        raise ValueError(msg)
    if len(key) > len(str(MAX_ID)) or int(key) > MAX_ID:
        msg = f"{where}: ID key {key!r} is above {MAX_ID}"
        raise ValueError(msg)
    return int(key)


def _parse_status(value: Any, where: str) -> Status:
    try:
        return Status(value)
    except ValueError:
        valid = ", ".join(s.value for s in Status)
        msg = f"{where}: invalid status {value!r} (expected one of {valid})"
        raise ValueError(msg) from None


def dict_to_story(data: dict[str, Any], where: str = "story") -> Story:
    """Convert a dictionary to a Story. Unknown fields are ignored."""
    if not isinstance(data, dict):
        msg = f"{where}: expected an object, got {type(data).__name__}"
        raise ValueError(msg)
    return Story(
        name=_require(data, "name", str, where),
        description=_require(data, "description", str, where),
        status=_parse_status(_require(data, "status", str, where), where),
    )


def dict_to_epic(data: dict[str, Any], where: str = "epic") -> Epic:
    """Convert a dictionary to an Epic. Unknown fields are ignored."""
    if not isinstance(data, dict):
        msg = f"{where}: expected an object, got {type(data).__name__}"
        raise ValueError(msg)
    raw_stories = _require(data, "stories", list, where)
    return Epic(
        name=_require(data, "name", str, where),
        description=_require(data, "description", str, where),
        status=_parse_status(_require(data, "status", str, where), where),
        stories=[_parse_id(sid, f"{where}.stories") for sid in raw_stories],
    )


def dict_to_state(data: Any) -> DBState:
    """Convert a decoded JSON document to a DBState.

    Raises:
        ValueError: If the document does not have the expected structure.
    """
    if not isinstance(data, dict):
        msg = f"expected a JSON object at top level, got {type(data).__name__}"
        raise ValueError(msg)

    last_item_id = _parse_id(_require(data, "last_item_id", int, "state"), "state")
    raw_epics = _require(data, "epics", dict, "state")
    raw_stories = _require(data, "stories", dict, "state")

    epics: dict[int, Epic] = {}
    for key, value in raw_epics.items():
        epic_id = _parse_key(key, "epics")
        epics[epic_id] = dict_to_epic(value, f"epic {key}")

    stories: dict[int, Story] = {}
    for key, value in raw_stories.items():
        story_id = _parse_key(key, "stories")
        stories[story_id] = dict_to_story(value, f"story {key}")

    return DBState(last_item_id=last_item_id, epics=epics, stories=stories)


def check_integrity(state: DBState) -> list[str]:
    """Return a list of referential-integrity problems in *state*.

    An empty list means every story belongs to exactly one epic, every
    referenced story exists, and no ID is above the allocation counter.
    """
    problems: list[str] = []
    owners: dict[int, list[int]] = {}

    for epic_id in sorted(state.epics):
        for story_id in state.epics[epic_id].stories:
            owners.setdefault(story_id, []).append(epic_id)
            if story_id not in state.stories:
                problems.append(f"epic {epic_id} references missing story {story_id}")

    for story_id in sorted(state.stories):
        epic_ids = owners.get(story_id, [])
        if not epic_ids:
            problems.append(f"story {story_id} is not referenced by any epic")
        elif len(epic_ids) > 1:
            joined = ", ".join(str(e) for e in epic_ids)
            problems.append(f"story {story_id} is referenced more than once ({joined})")

    overlap = sorted(set(state.epics) & set(state.stories))
    problems.extend(f"ID {item_id} is used by both an epic and a story" for item_id in overlap)

    highest = max([*state.epics, *state.stories], default=0)
    if highest > state.last_item_id:
        problems.append(
            f"last_item_id {state.last_item_id} is below the highest ID in use ({highest})",
        )

    return problems
