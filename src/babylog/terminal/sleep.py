# SPDX-License-Identifier: MIT

import asyncio
import re
from typing import Annotated, Any, Optional, cast

import pendulum
import typer
from rich.console import Console

from babylog.edit.navigator import SLEEP_FIELD_ORDER
from babylog.model.duration import Clock
from babylog.model.record import Record
from babylog.model.sleep import SLEEP_TYPES, Sleep, SleepType
from babylog.model.table import Table
from babylog.service.duration import (
    duration_preview,
    resolve_sleep_window,
    time_since_last_sleep,
)
from babylog.service.preset import apply_preset, find_preset, presets_for
from babylog.template.sleep import get_sleep_template
from babylog.terminal.custom_typer import AliasedTyperGroup
from babylog.terminal.parse import parse_clock, parse_date
from babylog.terminal.session import open_table
from babylog.time import clock_of, datetime_to_iso_str, local_date_at_clock
from babylog.view.sleep import sleep_preview_view, sleeps_view

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

CLOCK_HELP = "valid input: (H)H:mm"
DATE_HELP = "valid inputs: YYYY-MM-DD, today, yesterday, or day offset like -1"


def _validate_sleep_type(sleep_type: str) -> SleepType:
    if sleep_type not in SLEEP_TYPES:
        typer.echo(
            f"Invalid sleep type: {sleep_type}. Valid options: {', '.join(SLEEP_TYPES)}"
        )
        raise typer.Exit(1)
    return cast(SleepType, sleep_type)


@app.command("add, a")
def add(
    sleep_type: Annotated[
        str, typer.Option("--type", "-t", help="nap or night")
    ] = "night",
    date: Annotated[
        Optional[pendulum.Date],
        typer.Option("--date", "-d", parser=parse_date, help=DATE_HELP),
    ] = None,
    start: Annotated[
        Optional[str], typer.Option("--start", "-s", help=CLOCK_HELP)
    ] = None,
    end: Annotated[
        Optional[str],
        typer.Option(
            "--end",
            "-e",
            help=f"{CLOCK_HELP}; earlier than start means the next day",
        ),
    ] = None,
    preset: Annotated[
        Optional[str],
        typer.Option("--preset", "-p", help="fill the end time from a preset, e.g. 1.5h"),
    ] = None,
    notes: Annotated[Optional[str], typer.Option("--notes", "-n")] = None,
) -> None:
    """Log a nap or a night of sleep."""
    valid_sleep_type = _validate_sleep_type(sleep_type)

    sleep = get_sleep_template()
    sleep["sleep_type"] = valid_sleep_type
    sleep["notes"] = notes

    if date is None:
        date = pendulum.today("local").date()
    start_clock = parse_clock(start) or clock_of(sleep["start_time"])
    end_clock = parse_clock(end)
    if preset is not None:
        try:
            chosen = find_preset(valid_sleep_type, preset)
        except ValueError as e:
            raise typer.BadParameter(str(e))
        end_clock = apply_preset(start_clock, chosen.hours, chosen.minutes)
    if end_clock is None:
        # Same default gap as the template: eight hours after the start
        end_clock = apply_preset(start_clock, 8, 0)

    sleep["start_time"], sleep["end_time"] = resolve_sleep_window(
        date, start_clock, end_clock
    )

    created = asyncio.run(_create(sleep))
    if created is None:
        raise typer.Exit(1)
    sleeps_view([cast(Sleep, created)])


async def _create(sleep: Sleep) -> Optional[Record]:
    table = open_table(Table.SLEEP)
    return await table.create(sleep)


@app.command("list, ls")
def list_sleeps() -> None:
    """Show logged sleep, most recent first."""
    asyncio.run(_list())


async def _list() -> None:
    table = open_table(Table.SLEEP)
    sleeps = cast(list[Sleep], await table.load())
    sleeps_view(sleeps, last_sleep=time_since_last_sleep(sleeps))


@app.command("preview, p")
def preview(
    start: Annotated[str, typer.Argument(help=CLOCK_HELP)],
    end: Annotated[str, typer.Argument(help=CLOCK_HELP)],
    sleep_type: Annotated[
        str, typer.Option("--type", "-t", help="nap or night")
    ] = "night",
) -> None:
    """Show the duration of a planned sleep and the preset end times."""
    valid_sleep_type = _validate_sleep_type(sleep_type)
    start_clock = cast(Clock, parse_clock(start))
    end_clock = cast(Clock, parse_clock(end))
    sleep_preview_view(
        start_clock,
        end_clock,
        duration_preview(valid_sleep_type, start_clock, end_clock),
        presets_for(valid_sleep_type),
    )


def _field_value(sleep: Sleep, field: str, value: str) -> Any:
    """Clock inputs for times are placed on the sleep's own day."""
    if field not in ("start_time", "end_time") or not re.match(
        r"^\d{1,2}:\d{2}$", value.strip()
    ):
        return value

    clock = parse_clock(value)
    if clock is None:
        return value
    start_date = sleep["start_time"].in_tz("local").date()
    if field == "start_time":
        return datetime_to_iso_str(local_date_at_clock(start_date, clock))
    _, end_time = resolve_sleep_window(start_date, clock_of(sleep["start_time"]), clock)
    return datetime_to_iso_str(end_time)


@app.command("edit, e", no_args_is_help=True)
def edit(
    id: int,
    field: Annotated[
        str, typer.Argument(help="sleep_type, start_time, end_time or notes")
    ],
    value: Annotated[
        str, typer.Argument(help="new value; times accept (H)H:mm or ISO-8601")
    ],
) -> None:
    """Edit one field of a sleep log in place."""
    if field not in SLEEP_FIELD_ORDER:
        typer.echo(
            f"Invalid field: {field}. Valid options: {', '.join(SLEEP_FIELD_ORDER)}"
        )
        raise typer.Exit(1)
    if field == "sleep_type":
        _validate_sleep_type(value)

    if not asyncio.run(_edit(id, field, value)):
        raise typer.Exit(1)


async def _edit(id: int, field: str, value: str) -> bool:
    table = open_table(Table.SLEEP)
    await table.load()
    try:
        sleep = cast(Sleep, table.record(id))
    except KeyError:
        typer.echo(f"Sleep log {id} not found")
        return False

    table.click(id, field)
    pending = table.change(_field_value(sleep, field, value))
    if pending is None:
        return False

    outcome = await pending.outcome()
    await table.drain()
    if outcome.succeeded:
        sleeps_view(cast(list[Sleep], table.records), table)
    table.close()
    return outcome.succeeded


@app.command("delete, d", no_args_is_help=True)
def delete(
    id: int,
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="Skip the confirmation")
    ] = False,
) -> None:
    """Delete a sleep log. This cannot be undone."""
    if not asyncio.run(_delete(id, yes)):
        raise typer.Exit(1)


async def _delete(id: int, yes: bool) -> bool:
    table = open_table(Table.SLEEP)
    table.request_delete(id)

    if not yes:
        console = Console()
        console.print(
            f"[yellow]Sleep log {id} will be permanently deleted. "
            "This action cannot be undone.[/yellow]"
        )
        confirm = typer.confirm("Are you sure you want to continue?")
        if not confirm:
            table.cancel_delete()
            console.print("[cyan]Operation cancelled.[/cyan]")
            return True

    return await table.confirm_delete()
