"""Initialization command for epicat CLI."""

from __future__ import annotations

from pathlib import Path

import typer

from epicat.config import DEFAULT_CONFIG, get_config_path, load_config, save_config
from epicat.constants import EPICAT_DIRNAME
from epicat.storage import EpicatError

from ._helpers import EPICAT_DIR_HELP, get_store
from ._output import echo_error, echo_json, json_enabled


def register(app: typer.Typer) -> None:
    """Register the init command."""

    @app.command()
    def init(
        epicat_dir: str = typer.Option(EPICAT_DIRNAME, help=EPICAT_DIR_HELP),
        force: bool = typer.Option(
            False,
            "--force",
            help="Reset an existing database to an empty one",
        ),
        json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    ) -> None:
        """Initialize a new epicat repository.

        Creates the directory, a config.toml with default settings, and an
        empty database. An existing database is left alone unless --force is
        given.
        """
        epicat_path = Path(epicat_dir)
        try:
            epicat_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            echo_error(f"cannot create {epicat_path}: {e}")
            raise SystemExit(1) from e

        config_created = False
        if not get_config_path(epicat_dir).exists():
            save_config(epicat_dir, dict(DEFAULT_CONFIG))
            config_created = True
        else:
            # Fill in keys added since the config was written
            config = load_config(epicat_dir)
            missing = {k: v for k, v in DEFAULT_CONFIG.items() if k not in config}
            if missing:
                save_config(epicat_dir, {**config, **missing})

        store = get_store(epicat_dir)
        try:
            db_created = store.initialize(force=force)
        except EpicatError as e:
            echo_error(str(e))
            raise SystemExit(1) from e

        if json_enabled(json_output):
            echo_json(
                {
                    "epicat_dir": str(epicat_path),
                    "database": str(store.store.path),
                    "config_created": config_created,
                    "database_created": db_created,
                },
            )
            return

        if config_created:
            typer.echo(f"✓ Created {get_config_path(epicat_dir)}")
        if db_created:
            typer.echo(f"✓ Created empty database {store.store.path}")
        else:
            typer.echo(f"✓ Database {store.store.path} already exists (use --force to reset)")
        typer.echo(f"\n✓ epicat repository ready at {epicat_path}")
