"""List command for epicat CLI."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import typer

from epicat.constants import EPICAT_DIRNAME
from epicat.formatting import style_status
from epicat.models import Status, epic_to_dict, story_to_dict
from epicat.storage import EpicatError

from ._helpers import EPICAT_DIR_HELP, get_store, resolve_epicat_dir
from ._output import echo_error, echo_json, json_enabled

if TYPE_CHECKING:
    from epicat.models import DBState


def _parse_status(value: str) -> Status:
    """Accept a status tag ("InProgress") or label ("in progress"), any case."""
    wanted = value.strip().lower().replace("-", " ").replace("_", " ")
    for status in Status:
        if wanted in (status.value.lower(), status.label.lower()):
            return status
    valid = ", ".join(s.value for s in Status)
    msg = f"Invalid status '{value}'. Use one of: {valid}"
    raise ValueError(msg)


def _as_json(state: DBState, status: Status | None) -> list[dict[str, Any]]:
    epics: list[dict[str, Any]] = []
    for epic_id in sorted(state.epics):
        epic = state.epics[epic_id]
        if status is not None and epic.status != status:
            continue
        data = {"id": epic_id, **epic_to_dict(epic)}
        data["stories"] = [
            {"id": story_id, **story_to_dict(state.stories[story_id])}
            for story_id in epic.stories
            if story_id in state.stories
        ]
        epics.append(data)
    return epics


def register(app: typer.Typer) -> None:
    """Register the list command."""

    @app.command("list")
    def list_items(
        status: str | None = typer.Option(
            None,
            "--status",
            "-s",
            help="Only show epics with this status",
        ),
        epicat_dir: str = typer.Option(EPICAT_DIRNAME, help=EPICAT_DIR_HELP),
        json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    ) -> None:
        """List epics and their stories."""
        try:
            status_filter = _parse_status(status) if status else None
        except ValueError as e:
            echo_error(str(e))
            raise SystemExit(1) from e

        try:
            state = get_store(resolve_epicat_dir(epicat_dir)).load_state()
        except EpicatError as e:
            echo_error(str(e))
            raise SystemExit(1) from e

        if json_enabled(json_output):
            echo_json(_as_json(state, status_filter))
            return

        shown = 0
        for epic_id in sorted(state.epics):
            epic = state.epics[epic_id]
            if status_filter is not None and epic.status != status_filter:
                continue
            shown += 1
            label = style_status(epic.status, f"[{epic.status.label}]")
            typer.echo(f"{epic_id}: {epic.name} {label}")
            for story_id in sorted(epic.stories):
                story = state.stories.get(story_id)
                if story is None:
                    continue
                story_label = style_status(story.status, f"[{story.status.label}]")
                typer.echo(f"    {story_id}: {story.name} {story_label}")

        if not shown:
            typer.echo("No epics found")
