"""Plain/JSON output switching for epicat CLI commands."""

from __future__ import annotations

import sys
from typing import Any

import orjson
import typer

# Set once by the root callback; a command's own --json flag also turns it on
_json_mode: bool = False


def set_json_flag(value: bool) -> None:
    """Record the global --json flag."""
    global _json_mode  # noqa: PLW0603
    _json_mode = value


def json_enabled(local_flag: bool = False) -> bool:
    """Return True if output should be JSON.

    A command-level ``--json`` switches the whole process to JSON mode, so
    errors reported afterwards are JSON too.
    """
    if local_flag:
        set_json_flag(True)
    return _json_mode


def echo_json(payload: Any) -> None:
    """Write *payload* to stdout as indented JSON."""
    typer.echo(orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode())


def echo_error(message: str) -> None:
    """Report an error on stderr as ``{"error": ...}`` or ``Error: ...``."""
    if _json_mode:
        sys.stderr.write(orjson.dumps({"error": message}).decode() + "\n")
        return
    typer.echo(typer.style(f"Error: {message}", fg="red"), err=True)
