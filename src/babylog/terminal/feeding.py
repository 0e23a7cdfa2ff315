# SPDX-License-Identifier: MIT

import asyncio
from typing import Annotated, Any, Optional, cast

import typer
from rich.console import Console

from babylog.edit.navigator import FEEDING_FIELD_ORDER
from babylog.model.feeding import (
    DEFAULT_FEEDING_MINUTES,
    FEEDING_TYPES,
    MAX_FEEDING_MINUTES,
    MIN_FEEDING_MINUTES,
    Feeding,
)
from babylog.model.record import Record
from babylog.model.table import Table
from babylog.template.feeding import get_feeding_template
from babylog.terminal.custom_typer import AliasedTyperGroup
from babylog.terminal.session import open_table
from babylog.view.feeding import feedings_view, single_feeding_view

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


def _validate_feeding_type(feeding_type: str) -> None:
    if feeding_type not in FEEDING_TYPES:
        typer.echo(
            f"Invalid feeding type: {feeding_type}. Valid options: {', '.join(FEEDING_TYPES)}"
        )
        raise typer.Exit(1)


@app.command("add, a")
def add(
    feeding_type: Annotated[
        str, typer.Option("--type", "-t", help="breast, bottle or solids")
    ] = "breast",
    duration: Annotated[
        int,
        typer.Option(
            "--duration",
            "-d",
            min=MIN_FEEDING_MINUTES,
            max=MAX_FEEDING_MINUTES,
            help="minutes",
        ),
    ] = DEFAULT_FEEDING_MINUTES,
    amount: Annotated[
        Optional[float],
        typer.Option("--amount", "-a", help="ounces, bottle feedings only"),
    ] = None,
    notes: Annotated[Optional[str], typer.Option("--notes", "-n")] = None,
) -> None:
    """Log a feeding that just happened."""
    _validate_feeding_type(feeding_type)

    feeding = get_feeding_template()
    feeding["feeding_type"] = cast(Any, feeding_type)
    feeding["duration"] = duration
    feeding["amount"] = amount if feeding_type == "bottle" else None
    feeding["notes"] = notes

    created = asyncio.run(_create(feeding))
    if created is None:
        raise typer.Exit(1)
    single_feeding_view(cast(Feeding, created))


async def _create(feeding: Feeding) -> Optional[Record]:
    table = open_table(Table.FEEDINGS)
    return await table.create(feeding)


@app.command("list, ls")
def list_feedings() -> None:
    """Show logged feedings, most recent first."""
    asyncio.run(_list())


async def _list() -> None:
    table = open_table(Table.FEEDINGS)
    feedings = await table.load()
    feedings_view(cast(list[Feeding], feedings))


@app.command("edit, e", no_args_is_help=True)
def edit(
    id: int,
    field: Annotated[
        str, typer.Argument(help="feeding_type, duration, amount or notes")
    ],
    value: Annotated[str, typer.Argument(help="new value, empty to clear")],
) -> None:
    """Edit one field of a feeding in place."""
    if field not in FEEDING_FIELD_ORDER:
        typer.echo(
            f"Invalid field: {field}. Valid options: {', '.join(FEEDING_FIELD_ORDER)}"
        )
        raise typer.Exit(1)
    if field == "feeding_type":
        _validate_feeding_type(value)

    if not asyncio.run(_edit(id, field, value)):
        raise typer.Exit(1)


async def _edit(id: int, field: str, value: str) -> bool:
    table = open_table(Table.FEEDINGS)
    await table.load()
    try:
        feeding = cast(Feeding, table.record(id))
    except KeyError:
        typer.echo(f"Feeding {id} not found")
        return False
    if field == "amount" and feeding["feeding_type"] != "bottle":
        typer.echo("Amount can only be edited on bottle feedings")
        return False

    table.click(id, field)
    pending = table.change(value)
    if pending is None:
        pending = table.enter(id, field)
    if pending is None:
        return False

    outcome = await pending.outcome()
    await table.drain()
    if outcome.succeeded:
        feedings_view(cast(list[Feeding], table.records), table)
    table.close()
    return outcome.succeeded


@app.command("delete, d", no_args_is_help=True)
def delete(
    id: int,
    yes: Annotated[
        bool, typer.Option("--yes", "-y", help="Skip the confirmation")
    ] = False,
) -> None:
    """Delete a feeding. This cannot be undone."""
    if not asyncio.run(_delete(id, yes)):
        raise typer.Exit(1)


async def _delete(id: int, yes: bool) -> bool:
    table = open_table(Table.FEEDINGS)
    table.request_delete(id)

    if not yes:
        console = Console()
        console.print(
            f"[yellow]Feeding {id} will be permanently deleted. "
            "This action cannot be undone.[/yellow]"
        )
        confirm = typer.confirm("Are you sure you want to continue?")
        if not confirm:
            table.cancel_delete()
            console.print("[cyan]Operation cancelled.[/cyan]")
            return True

    return await table.confirm_delete()
