"""epicat CLI commands."""

from __future__ import annotations

import logging

import typer

from ._helpers import SortedGroup

app = typer.Typer(
    help="epicat - file-based epic and story tracking in the terminal",
    no_args_is_help=True,
    cls=SortedGroup,
)


@app.callback(invoke_without_command=True)
def _global_options(
    ctx: typer.Context,
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output as JSON for all commands",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log debug messages to stderr",
    ),
) -> None:
    from ._output import set_json_flag

    set_json_flag(json_output)
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(0)


from . import _cmd_browse, _cmd_doctor, _cmd_init, _cmd_list  # noqa: E402

for _mod in (_cmd_browse, _cmd_doctor, _cmd_init, _cmd_list):
    _mod.register(app)


def main() -> None:
    """Run the epicat CLI application."""
    app()
