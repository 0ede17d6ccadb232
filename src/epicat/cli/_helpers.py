"""Shared infrastructure for epicat CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from typer.core import TyperGroup

from epicat.config import get_db_path
from epicat.constants import EPICAT_DIRNAME
from epicat.storage import EpicStore, JSONFileStore

if TYPE_CHECKING:
    import click

EPICAT_DIR_HELP = "Path to .epicat directory"


class SortedGroup(TyperGroup):
    """Typer group that lists commands in alphabetical order."""

    def list_commands(self, ctx: click.Context) -> list[str]:
        """Return commands sorted alphabetically."""
        return sorted(super().list_commands(ctx))


def find_epicat_dir(start_dir: str | None = None) -> str:
    """Find the .epicat directory by searching upward from *start_dir*.

    Args:
        start_dir: Directory to start searching from (default: current directory)

    Returns:
        Path to .epicat directory, or ".epicat" if not found
    """
    current = Path.cwd() if start_dir is None else Path(start_dir).resolve()

    while True:
        candidate = current / EPICAT_DIRNAME
        if candidate.is_dir():
            return str(candidate)
        parent = current.parent
        if parent == current:
            return EPICAT_DIRNAME
        current = parent


def resolve_epicat_dir(epicat_dir: str) -> str:
    """Resolve the --epicat-dir option.

    The default name is looked up upward from the current directory (the way
    git finds .git); an explicit path is used as given.
    """
    if epicat_dir == EPICAT_DIRNAME and not Path(epicat_dir).is_dir():
        return find_epicat_dir()
    return epicat_dir


def get_store(epicat_dir: str) -> EpicStore:
    """Build an EpicStore for the database configured in *epicat_dir*."""
    return EpicStore(JSONFileStore(get_db_path(epicat_dir)))
