# SPDX-License-Identifier: MIT

from typing import Optional

from babylog.color import HIGHLIGHT_STYLE, SAVING_STYLE
from babylog.edit.table import EditableTable
from babylog.model.record_id import RecordId


def cell(
    value: str,
    record_id: Optional[RecordId],
    field_name: str,
    editable_table: Optional[EditableTable],
) -> str:
    """Wrap a cell in the highlight or saving style when the controller says so."""
    if editable_table is None or record_id is None:
        return value
    if editable_table.is_saving(record_id, field_name):
        return f"[{SAVING_STYLE}]{value} …[/{SAVING_STYLE}]"
    if editable_table.is_highlighted(record_id, field_name):
        return f"[{HIGHLIGHT_STYLE}]{value}[/{HIGHLIGHT_STYLE}]"
    if editable_table.tracker.is_editing(record_id, field_name):
        return f"[underline]{value}[/underline]"
    return value
