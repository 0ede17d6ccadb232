"""Interactive browser command for epicat CLI."""

from __future__ import annotations

import logging

import typer

from epicat.config import get_setting
from epicat.constants import EPICAT_DIRNAME
from epicat.navigator import Navigator
from epicat.prompts import Prompts, read_line, wait_for_key_press
from epicat.storage import EpicatError

from ._helpers import EPICAT_DIR_HELP, get_store, resolve_epicat_dir
from ._output import echo_error

logger = logging.getLogger(__name__)


def _report(stage: str, error: EpicatError) -> None:
    logger.warning("Error %s: %s", stage, error)
    typer.echo(f"Error {stage}: {error}\nPress any key to continue...")
    wait_for_key_press()


def run_loop(navigator: Navigator, *, clear_screen: bool = True) -> None:
    """Drive *navigator* until the operator exits or input runs out.

    Each round clears the terminal, renders the current screen, reads one
    line and applies the resulting action. Errors are shown to the operator
    and acknowledged with a key press before the loop carries on.
    """
    try:
        while navigator.current_screen is not None:
            if clear_screen:
                typer.clear()

            try:
                typer.echo(navigator.render_current())
            except EpicatError as e:
                _report("rendering page", e)

            raw = read_line()

            try:
                action = navigator.handle_input(raw)
            except EpicatError as e:
                _report("getting user input", e)
                continue

            if action is None:
                continue

            try:
                navigator.handle_action(action)
            except EpicatError as e:
                _report("handling user input", e)
    except EOFError:
        logger.debug("End of input, leaving browser")


def register(app: typer.Typer) -> None:
    """Register the browse command."""

    @app.command()
    def browse(
        epicat_dir: str = typer.Option(EPICAT_DIRNAME, help=EPICAT_DIR_HELP),
        no_clear: bool = typer.Option(
            False,
            "--no-clear",
            help="Do not clear the terminal between screens",
        ),
    ) -> None:
        """Browse and edit epics and stories interactively.

        Type the letter shown in brackets to run a command, or an item ID to
        open it.
        """
        epicat_dir = resolve_epicat_dir(epicat_dir)
        store = get_store(epicat_dir)
        if not store.store.exists():
            echo_error(f"no database at {store.store.path}. Run 'ecat init' first.")
            raise SystemExit(1)

        navigator = Navigator(
            store,
            Prompts(),
            accept_leading_zeros=get_setting(epicat_dir, "accept_leading_zeros"),
        )
        run_loop(
            navigator,
            clear_screen=get_setting(epicat_dir, "clear_screen") and not no_clear,
        )
