# SPDX-License-Identifier: MIT

from typing import Optional

from rich import box
from rich.console import Console
from rich.table import Table

from babylog.edit.table import EditableTable
from babylog.model.feeding import FEEDING_TYPE_LABELS, Feeding
from babylog.service.duration import format_feeding_duration
from babylog.time import datetime_to_display_local_datetime_str
from babylog.view.header import header
from babylog.view.util import cell


def format_amount(feeding: Feeding) -> str:
    # Amount only means something for bottle feedings
    if feeding["feeding_type"] != "bottle" or feeding["amount"] is None:
        return ""
    return f"{feeding['amount']:g} oz"


def feedings_view(
    feedings: list[Feeding],
    editable_table: Optional[EditableTable] = None,
    columns: list[str] = ["id", "timestamp", "feeding_type", "duration", "amount", "notes"],
) -> None:
    header("feedings")

    feedings_table = Table(box=box.SIMPLE)
    for column in columns:
        feedings_table.add_column(column)

    for feeding in feedings:
        row = []
        for column in columns:
            column_value = ""
            if column == "id":
                column_value = str(feeding["id"])
            elif column == "timestamp":
                column_value = datetime_to_display_local_datetime_str(
                    feeding["timestamp"]
                )
            elif column == "feeding_type":
                column_value = FEEDING_TYPE_LABELS.get(
                    feeding["feeding_type"], feeding["feeding_type"]
                )
            elif column == "duration":
                column_value = format_feeding_duration(feeding["duration"])
            elif column == "amount":
                column_value = format_amount(feeding)
            elif feeding.get(column) is not None:
                column_value = str(feeding[column])  # type: ignore[literal-required]

            row.append(cell(column_value, feeding["id"], column, editable_table))
        feedings_table.add_row(*row)

    console = Console()
    console.print(feedings_table)


def single_feeding_view(
    feeding: Feeding, editable_table: Optional[EditableTable] = None
) -> None:
    header("feeding")

    feeding_table = Table(box=box.SIMPLE)
    feeding_table.add_column("property")
    feeding_table.add_column("value")

    record_id = feeding["id"]
    feeding_table.add_row("id", str(record_id))
    feeding_table.add_row(
        "timestamp", datetime_to_display_local_datetime_str(feeding["timestamp"])
    )
    feeding_table.add_row(
        "feeding_type",
        cell(
            FEEDING_TYPE_LABELS.get(feeding["feeding_type"], feeding["feeding_type"]),
            record_id,
            "feeding_type",
            editable_table,
        ),
    )
    feeding_table.add_row(
        "duration",
        cell(
            format_feeding_duration(feeding["duration"]),
            record_id,
            "duration",
            editable_table,
        ),
    )
    feeding_table.add_row(
        "amount", cell(format_amount(feeding), record_id, "amount", editable_table)
    )
    feeding_table.add_row(
        "notes", cell(feeding["notes"] or "", record_id, "notes", editable_table)
    )

    console = Console()
    console.print(feeding_table)
