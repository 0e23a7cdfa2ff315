# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from babylog import configuration
from babylog.repository.configuration import CONFIGURATION_REPO
from babylog.terminal.custom_typer import AliasedTyperGroup

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def __configuration_table(config: configuration.Configuration, **kwargs) -> Table:
    table = Table(**kwargs)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row(
        "data_path",
        config["data_path"] if config["data_path"] else "None (default location)",
    )
    table.add_row("feeding_settle_delay_ms", str(config["feeding_settle_delay_ms"]))
    table.add_row("sleep_settle_delay_ms", str(config["sleep_settle_delay_ms"]))
    table.add_row("highlight_window_ms", str(config["highlight_window_ms"]))
    table.add_row("log_level", config["log_level"])
    return table


@app.command("view, v")
def view() -> None:
    """Display current configuration settings."""
    config = CONFIGURATION_REPO.get_config()

    console = Console()
    console.print(__configuration_table(config))
    console.print()
    console.print(f"Config file: {configuration.APP_CONFIG_PATH}")
    console.print(f"Data directory: {configuration.DATA_PATH}")


@app.command("set, s")
def set(
    data_path: Annotated[
        Optional[str],
        typer.Option(
            "--data-path",
            help="Directory path for storing feeding and sleep logs",
        ),
    ] = None,
    remove_data_path: Annotated[
        bool,
        typer.Option(
            "--remove-data-path",
            help="Reset data path to None (use the default location)",
        ),
    ] = False,
    feeding_settle_delay_ms: Annotated[
        Optional[int],
        typer.Option(
            "--feeding-settle-delay-ms",
            min=0,
            help="Delay before a feeding edit is saved",
        ),
    ] = None,
    sleep_settle_delay_ms: Annotated[
        Optional[int],
        typer.Option(
            "--sleep-settle-delay-ms",
            min=0,
            help="Quiet period before a sleep edit is saved",
        ),
    ] = None,
    highlight_window_ms: Annotated[
        Optional[int],
        typer.Option(
            "--highlight-window-ms",
            min=0,
            help="How long a saved cell stays highlighted",
        ),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option(
            "--log-level",
            help=f"One of {', '.join(LOG_LEVELS)}",
        ),
    ] = None,
) -> None:
    """
    Update configuration settings.
    """
    if log_level is not None:
        log_level = log_level.upper()
        if log_level not in LOG_LEVELS:
            typer.echo(
                f"Invalid log level: {log_level}. Valid options: {', '.join(LOG_LEVELS)}"
            )
            raise typer.Exit(1)

    CONFIGURATION_REPO.update_config(
        data_path=data_path,
        remove_data_path=remove_data_path,
        feeding_settle_delay_ms=feeding_settle_delay_ms,
        sleep_settle_delay_ms=sleep_settle_delay_ms,
        highlight_window_ms=highlight_window_ms,
        log_level=log_level,
    )

    config = CONFIGURATION_REPO.get_config()

    console = Console()
    console.print("[green]Configuration updated successfully![/green]\n")
    console.print(
        __configuration_table(config, title="Updated Configuration", show_header=True)
    )
