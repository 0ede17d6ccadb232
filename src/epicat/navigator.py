"""Screen stack and action handling for the interactive browser."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from epicat.models import (
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
from epicat.prompts import Prompts
from epicat.screens import EpicScreen, HomeScreen, Screen, StoryScreen, interpret, render

if TYPE_CHECKING:
    from epicat.models import Action
    from epicat.storage import EpicStore

logger = logging.getLogger(__name__)


class Navigator:
    """Owns the stack of open screens and applies actions to it.

    The stack starts with the home screen. An empty stack means the
    application has finished. Actions that touch the store do so before
    changing the stack, so a failing store call leaves the stack as it was.
    """

    def __init__(
        self,
        store: EpicStore,
        prompts: Prompts | None = None,
        *,
        accept_leading_zeros: bool = False,
    ) -> None:
        self.store = store
        self.prompts = prompts or Prompts()
        self.accept_leading_zeros = accept_leading_zeros
        self._pages: list[Screen] = [HomeScreen()]

    @property
    def current_screen(self) -> Screen | None:
        """The screen on top of the stack, or None once the app has exited."""
        return self._pages[-1] if self._pages else None

    @property
    def page_count(self) -> int:
        """Number of screens on the stack."""
        return len(self._pages)

    def render_current(self) -> str:
        """Render the current screen; empty text when there is none."""
        screen = self.current_screen
        if screen is None:
            return ""
        return render(screen, self.store)

    def handle_input(self, raw: str) -> Action | None:
        """Interpret a raw input line against the current screen."""
        screen = self.current_screen
        if screen is None:
            return None
        return interpret(
            screen,
            raw.strip(),
            self.store,
            accept_leading_zeros=self.accept_leading_zeros,
        )

    def _pop(self) -> None:
        if self._pages:
            self._pages.pop()

    def handle_action(self, action: Action) -> None:
        """Apply *action* to the screen stack and the store.

        Raises:
            EpicatError: Propagated from the store; the stack is unchanged.
        """
        logger.debug("Handling %r", action)

        if isinstance(action, NavigateToEpicDetail):
            self._pages.append(EpicScreen(action.epic_id))
        elif isinstance(action, NavigateToStoryDetail):
            self._pages.append(StoryScreen(action.epic_id, action.story_id))
        elif isinstance(action, NavigateToPreviousPage):
            self._pop()
        elif isinstance(action, CreateEpic):
            self.store.create_epic(self.prompts.create_epic())
        elif isinstance(action, CreateStory):
            self.store.create_story(self.prompts.create_story(), action.epic_id)
        elif isinstance(action, UpdateEpicStatus):
            status = self.prompts.update_status()
            if status is not None:
                self.store.update_epic_status(action.epic_id, status)
        elif isinstance(action, UpdateStoryStatus):
            status = self.prompts.update_status()
            if status is not None:
                self.store.update_story_status(action.story_id, status)
        elif isinstance(action, DeleteEpic):
            # The page is left whether or not the delete was confirmed
            if self.prompts.delete_epic():
                self.store.delete_epic(action.epic_id)
            self._pop()
        elif isinstance(action, DeleteStory):
            if self.prompts.delete_story():
                self.store.delete_story(action.epic_id, action.story_id)
            self._pop()
        elif isinstance(action, Exit):
            self._pages.clear()
