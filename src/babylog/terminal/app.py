# SPDX-License-Identifier: MIT

from typing import Annotated

import typer

from babylog.log import configure_logging
from babylog.terminal import configuration, feeding, sleep
from babylog.terminal.custom_typer import OrderedAliasedTyperGroup
from babylog.view import state as view_state

app = typer.Typer(
    cls=OrderedAliasedTyperGroup,
    help="Babylog - Feeding and sleep logs in the CLI",
    no_args_is_help=True,
)
app.add_typer(feeding.app, name="feeding, f", help="Log and edit feedings")
app.add_typer(sleep.app, name="sleep, s", help="Log and edit naps and nights")
app.add_typer(configuration.app, name="config, c", help="View and change settings")


@app.callback()
def main_callback(
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in reports",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Log edit and storage activity to stderr",
        ),
    ] = False,
) -> None:
    """
    Babylog - Feeding and sleep logs in the CLI

    Global options that apply to all commands.
    """
    if no_header:
        view_state.set_show_header(False)
    if verbose:
        configure_logging("DEBUG")


def run() -> None:
    app()
