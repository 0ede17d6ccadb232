"""JSON file storage for epics and stories with whole-document writes."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

import orjson

from epicat.constants import MAX_ID
from epicat.models import (
    DBState,
    Epic,
    Status,
    Story,
    dict_to_state,
    empty_state,
    state_to_dict,
)

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)


class EpicatError(Exception):
    """Base class for errors raised by epicat."""


class StorageIOError(EpicatError):
    """The database file could not be read or written."""


class DecodeError(EpicatError):
    """The database file does not contain a valid epicat document."""


class IDSpaceExhaustedError(EpicatError):
    """No IDs are left to allocate."""


class NotFoundError(EpicatError):
    """A referenced epic or story does not exist."""

    def __init__(self, kind: str, item_id: int, detail: str | None = None) -> None:
        self.kind = kind
        self.item_id = item_id
        msg = detail or f"Could not find {kind} {item_id} in the database"
        super().__init__(msg)


class JSONFileStore:
    """Reads and writes the raw database document as a single blob."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def exists(self) -> bool:
        """Check whether the database file is present."""
        return self.path.is_file()

    def load(self) -> bytes:
        """Read the whole document.

        Raises:
            StorageIOError: If the file is missing or unreadable.
        """
        try:
            return self.path.read_bytes()
        except OSError as e:
            msg = f"Failed to read database file {self.path}: {e}"
            raise StorageIOError(msg) from e

    def save(self, data: bytes) -> None:
        """Replace the whole document with *data*.

        Writes to a temporary file in the same directory, then renames it over
        the target.

        Raises:
            StorageIOError: If the file could not be written.
        """
        try:
            with tempfile.NamedTemporaryFile(
                mode="wb",
                dir=self.path.parent,
                delete=False,
                prefix=".db-",
                suffix=".json",
            ) as tmp_file:
                tmp_path = Path(tmp_file.name)
                try:
                    tmp_file.write(data)
                    tmp_file.flush()
                    os.fsync(tmp_file.fileno())
                except OSError:
                    tmp_path.unlink(missing_ok=True)
                    raise
        except OSError as e:
            msg = f"Failed to write to temporary file: {e}"
            raise StorageIOError(msg) from e

        try:
            tmp_path.replace(self.path)
        except OSError as e:
            tmp_path.unlink(missing_ok=True)
            msg = f"Failed to write database file {self.path}: {e}"
            raise StorageIOError(msg) from e


class EpicStore:
    """Typed access to the epic/story database.

    Every public operation reads the full document, applies its change in
    memory and writes the full document back. Nothing is cached between
    calls, so each operation sees whatever was most recently saved. A failing
    operation raises before anything is written.
    """

    def __init__(self, store: JSONFileStore) -> None:
        self.store = store

    def _read(self) -> DBState:
        raw = self.store.load()
        try:
            return dict_to_state(orjson.loads(raw))
        except ValueError as e:
            # orjson.JSONDecodeError is a ValueError subclass
            msg = f"Invalid database document in {self.store.path}: {e}"
            raise DecodeError(msg) from e

    def _write(self, state: DBState) -> None:
        self.store.save(orjson.dumps(state_to_dict(state)))
        logger.debug(
            "Saved %d epic(s), %d story(ies) to %s",
            len(state.epics),
            len(state.stories),
            self.store.path,
        )

    @staticmethod
    def _allocate_id(state: DBState) -> int:
        if state.last_item_id >= MAX_ID:
            msg = f"Cannot create more items: last_item_id is already {state.last_item_id}"
            raise IDSpaceExhaustedError(msg)
        state.last_item_id += 1
        return state.last_item_id

    def _mutate(self, change: Callable[[DBState], None]) -> None:
        state = self._read()
        change(state)
        self._write(state)

    def initialize(self, *, force: bool = False) -> bool:
        """Write an empty database if none exists (or always, with *force*).

        Returns:
            True if a document was written.
        """
        if self.store.exists() and not force:
            return False
        self._write(empty_state())
        return True

    def load_state(self) -> DBState:
        """Load and return the full state."""
        return self._read()

    def create_epic(self, epic: Epic) -> int:
        """Insert *epic* under a newly allocated ID and return the ID."""
        state = self._read()
        new_id = self._allocate_id(state)
        state.epics[new_id] = epic
        self._write(state)
        logger.debug("Created epic %d", new_id)
        return new_id

    def create_story(self, story: Story, epic_id: int) -> int:
        """Insert *story* under a new ID and attach it to epic *epic_id*.

        Raises:
            NotFoundError: If the epic does not exist.
        """
        state = self._read()
        epic = state.epics.get(epic_id)
        if epic is None:
            raise NotFoundError("epic", epic_id)

        new_id = self._allocate_id(state)
        state.stories[new_id] = story
        epic.stories.append(new_id)
        self._write(state)
        logger.debug("Created story %d in epic %d", new_id, epic_id)
        return new_id

    def delete_epic(self, epic_id: int) -> None:
        """Delete an epic and every story it owns.

        The ID counter is left untouched; IDs are never reused.
        """

        def change(state: DBState) -> None:
            epic = state.epics.get(epic_id)
            if epic is None:
                raise NotFoundError("epic", epic_id)
            for story_id in epic.stories:
                state.stories.pop(story_id, None)
            del state.epics[epic_id]

        self._mutate(change)

    def delete_story(self, epic_id: int, story_id: int) -> None:
        """Delete a story that belongs to epic *epic_id*.

        A story that exists under a different epic counts as not found.
        """

        def change(state: DBState) -> None:
            epic = state.epics.get(epic_id)
            if epic is None:
                raise NotFoundError("epic", epic_id)
            if story_id not in epic.stories:
                raise NotFoundError(
                    "story",
                    story_id,
                    f"Story {story_id} not found in epic {epic_id}",
                )
            epic.stories.remove(story_id)
            state.stories.pop(story_id, None)

        self._mutate(change)

    def update_epic_status(self, epic_id: int, status: Status) -> None:
        """Set the status of an epic."""

        def change(state: DBState) -> None:
            epic = state.epics.get(epic_id)
            if epic is None:
                raise NotFoundError("epic", epic_id)
            epic.status = status

        self._mutate(change)

    def update_story_status(self, story_id: int, status: Status) -> None:
        """Set the status of a story."""

        def change(state: DBState) -> None:
            story = state.stories.get(story_id)
            if story is None:
                raise NotFoundError("story", story_id)
            story.status = status

        self._mutate(change)
