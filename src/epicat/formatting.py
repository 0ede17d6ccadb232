"""Column layout and color helpers for epicat screens."""

from __future__ import annotations

from typing import TYPE_CHECKING

import typer

from epicat.constants import CHROME_COLOR, STATUS_COLORS

if TYPE_CHECKING:
    from epicat.models import Status

ELLIPSIS = "..."


def get_column_string(text: str, width: int) -> str:
    """Fit *text* into a column exactly *width* characters wide.

    Shorter text is right-padded with spaces. Longer text is cut down and
    ends in an ellipsis; columns of width 3 or less are too narrow for any
    text and become that many dots.

    Examples:
        get_column_string("test", 6)        -> "test  "
        get_column_string("testmetest", 6)  -> "tes..."
        get_column_string("testmetest", 2)  -> ".."
    """
    if len(text) == width:
        return text
    if len(text) < width:
        return text.ljust(width)
    if width <= len(ELLIPSIS):
        return "." * width
    return text[: width - len(ELLIPSIS)] + ELLIPSIS


def chrome(text: str) -> str:
    """Style table borders and headers."""
    return typer.style(text, fg=CHROME_COLOR)


def style_status(status: Status, column: str) -> str:
    """Color an already laid-out status column according to *status*."""
    return typer.style(column, fg=STATUS_COLORS.get(status.value, "white"))


def join_columns(*columns: str) -> str:
    """Join laid-out columns with a styled '|' separator."""
    return f" {chrome('|')} ".join(columns)


def format_menu(*entries: tuple[str, str]) -> str:
    """Format the command hint line shown under a screen.

    Args:
        entries: (label, color) pairs, e.g. ("[q] quit", "red")
    """
    return f" {chrome('|')} ".join(typer.style(label, fg=color) for label, color in entries)
