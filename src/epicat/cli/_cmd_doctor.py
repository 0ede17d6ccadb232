"""Doctor command for epicat CLI."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import typer

from epicat.config import get_config_path
from epicat.constants import EPICAT_DIRNAME
from epicat.models import check_integrity
from epicat.storage import DecodeError, StorageIOError

from ._helpers import EPICAT_DIR_HELP, get_store, resolve_epicat_dir
from ._output import echo_json, json_enabled


def register(app: typer.Typer) -> None:
    """Register the doctor command."""

    @app.command()
    def doctor(
        epicat_dir: str = typer.Option(EPICAT_DIRNAME, help=EPICAT_DIR_HELP),
        json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    ) -> None:
        """Check the epicat directory, database format and data integrity.

        Exit code 0 = all OK, 1 = problems found.
        """
        epicat_dir = resolve_epicat_dir(epicat_dir)
        checks: dict[str, dict[str, Any]] = {}
        problems: list[str] = []

        epicat_path = Path(epicat_dir)
        checks["epicat_dir"] = {
            "description": f"{epicat_dir}/ directory exists",
            "passed": epicat_path.is_dir(),
            "fix": f"Run 'ecat init' to create {epicat_dir}",
        }

        checks["config_toml"] = {
            "description": f"{get_config_path(epicat_dir)} exists",
            "passed": get_config_path(epicat_dir).is_file(),
            "fix": "Run 'ecat init' to write a default config",
            "optional": True,
        }

        store = get_store(epicat_dir)
        state = None
        decode_error = ""
        try:
            state = store.load_state()
        except (StorageIOError, DecodeError) as e:
            decode_error = str(e)

        checks["database"] = {
            "description": f"{store.store.path} is a valid database",
            "fail_description": f"{store.store.path} is missing or invalid",
            "passed": state is not None,
            "fix": "Restore from backup or run 'ecat init --force' to reset",
        }
        if decode_error:
            checks["database"]["error"] = decode_error

        if state is not None:
            problems = check_integrity(state)
            checks["integrity"] = {
                "description": "Every story belongs to exactly one epic",
                "fail_description": f"{len(problems)} integrity problem(s) found",
                "passed": not problems,
                "fix": "Edit the database by hand or restore from backup",
            }

        all_passed = all(c["passed"] or c.get("optional") for c in checks.values())

        if json_enabled(json_output):
            echo_json(
                {
                    "status": "ok" if all_passed else "issues_found",
                    "checks": checks,
                    "problems": problems,
                },
            )
            raise typer.Exit(0 if all_passed else 1)

        for problem in problems:
            typer.echo(f"  [ERROR] {problem}")
        if problems:
            typer.echo()

        typer.echo("epicat Health Check\n")
        for check in checks.values():
            if check["passed"]:
                typer.echo(typer.style(f"✓ {check['description']}", fg="green"))
                continue
            desc = check.get("fail_description", check["description"])
            if check.get("optional"):
                typer.echo(typer.style(f"○ {desc}", fg="yellow"))
                continue
            typer.echo(typer.style(f"✗ {desc}", fg="red"))
            if "error" in check:
                typer.echo(f"  {check['error']}")
            typer.echo(typer.style(f"  Fix: {check['fix']}", fg="yellow"))

        if all_passed:
            typer.echo(typer.style("\n✓ All checks passed!", fg="green"))
        else:
            typer.echo(typer.style("\n✗ Some checks failed. See above for fixes.", fg="red"))

        raise typer.Exit(0 if all_passed else 1)
