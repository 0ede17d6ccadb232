"""Interactive prompts used by the navigator."""

from __future__ import annotations

import sys
from collections.abc import Callable
from dataclasses import dataclass

import typer

from epicat.constants import SEPARATOR
from epicat.models import Epic, Status, Story

_STATUS_CHOICES = {
    "1": Status.OPEN,
    "2": Status.IN_PROGRESS,
    "3": Status.RESOLVED,
    "4": Status.CLOSED,
}


def read_line() -> str:
    """Read one raw line from stdin, including its newline.

    Raises:
        EOFError: At end of input.
    """
    line = sys.stdin.readline()
    if not line:
        raise EOFError
    return line


def wait_for_key_press() -> None:
    """Block until the operator presses enter."""
    read_line()


def _ask(label: str) -> str:
    typer.echo(f"{label}: ")
    return read_line().strip()


def create_epic_prompt() -> Epic:
    """Ask for the name and description of a new epic."""
    typer.echo(SEPARATOR)
    name = _ask("Epic Name")
    description = _ask("Epic Description")
    return Epic(name=name, description=description)


def create_story_prompt() -> Story:
    """Ask for the name and description of a new story."""
    typer.echo(SEPARATOR)
    name = _ask("Story Name")
    description = _ask("Story Description")
    return Story(name=name, description=description)


def _confirm(question: str) -> bool:
    # Only an exact "Y" confirms; the default is to keep the item
    typer.echo(SEPARATOR)
    typer.echo(f"{question} [Y/n]: ")
    return read_line().strip() == "Y"


def delete_epic_prompt() -> bool:
    """Ask the operator to confirm deleting an epic and all its stories."""
    return _confirm(
        "Are you sure you want to delete this epic? "
        "All stories in this epic will also be deleted",
    )


def delete_story_prompt() -> bool:
    """Ask the operator to confirm deleting a story."""
    return _confirm("Are you sure you want to delete this story?")


def update_status_prompt() -> Status | None:
    """Ask for a new status.

    Returns:
        The chosen status, or None if the answer was not 1-4.
    """
    typer.echo(SEPARATOR)
    typer.echo("New Status (1 - OPEN, 2 - IN-PROGRESS, 3 - RESOLVED, 4 - CLOSED): ")
    return _STATUS_CHOICES.get(read_line().strip())


@dataclass
class Prompts:
    """The set of prompts the navigator calls out to.

    Each field can be replaced individually, e.g. by tests that script the
    operator's answers.
    """

    create_epic: Callable[[], Epic] = create_epic_prompt
    create_story: Callable[[], Story] = create_story_prompt
    delete_epic: Callable[[], bool] = delete_epic_prompt
    delete_story: Callable[[], bool] = delete_story_prompt
    update_status: Callable[[], Status | None] = update_status_prompt
