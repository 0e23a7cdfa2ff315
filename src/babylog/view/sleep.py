# SPDX-License-Identifier: MIT

from typing import Optional

from rich import box
from rich.console import Console
from rich.table import Table

from babylog.color import CLASSIFICATION_COLORS
from babylog.edit.table import EditableTable
from babylog.model.duration import Clock, Preset
from babylog.model.sleep import SLEEP_TYPE_LABELS, Sleep
from babylog.service.duration import (
    SleepDurationPreview,
    classify,
    format_duration,
    sleep_record_minutes,
)
from babylog.time import (
    datetime_to_display_local_datetime_str,
    datetime_to_display_local_datetime_str_optional,
)
from babylog.view.header import header
from babylog.view.util import cell


def format_sleep_duration(sleep: Sleep) -> str:
    minutes = sleep_record_minutes(sleep)
    if minutes is None:
        return "ongoing"
    color = CLASSIFICATION_COLORS[classify(minutes, sleep["sleep_type"])]
    return f"[{color}]{format_duration(minutes)}[/{color}]"


def sleeps_view(
    sleeps: list[Sleep],
    editable_table: Optional[EditableTable] = None,
    columns: list[str] = ["id", "sleep_type", "start_time", "end_time", "duration", "notes"],
    last_sleep: Optional[str] = None,
) -> None:
    header("sleep")

    sleeps_table = Table(box=box.SIMPLE)
    for column in columns:
        sleeps_table.add_column(column)

    for sleep in sleeps:
        row = []
        for column in columns:
            column_value = ""
            if column == "id":
                column_value = str(sleep["id"])
            elif column == "sleep_type":
                column_value = SLEEP_TYPE_LABELS.get(
                    sleep["sleep_type"], sleep["sleep_type"]
                )
            elif column == "start_time":
                column_value = datetime_to_display_local_datetime_str(
                    sleep["start_time"]
                )
            elif column == "end_time":
                column_value = (
                    datetime_to_display_local_datetime_str_optional(sleep["end_time"])
                    or ""
                )
            elif column == "duration":
                column_value = format_sleep_duration(sleep)
            elif sleep.get(column) is not None:
                column_value = str(sleep[column])  # type: ignore[literal-required]

            row.append(cell(column_value, sleep["id"], column, editable_table))
        sleeps_table.add_row(*row)

    console = Console()
    console.print(sleeps_table)
    if last_sleep is not None:
        console.print(f" [bright_black]Last sleep: {last_sleep}[/bright_black]")


def sleep_preview_view(
    start_clock: Clock,
    end_clock: Clock,
    preview: SleepDurationPreview,
    presets: list[Preset],
) -> None:
    header("sleep preview")

    color = CLASSIFICATION_COLORS[preview["classification"]]
    console = Console()
    console.print(
        f" {start_clock} -> {end_clock}  Duration: "
        f"[bold {color}]{preview['text']}[/bold {color}]"
    )

    presets_table = Table(box=box.SIMPLE)
    presets_table.add_column("preset")
    presets_table.add_column("end")
    presets_table.add_column("note")
    for preset, end_time in zip(presets, preview["suggested_end_times"]):
        presets_table.add_row(preset.label, str(end_time), preset.tooltip)
    console.print(presets_table)
