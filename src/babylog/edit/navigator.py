# SPDX-License-Identifier: MIT

from typing import Any, Optional

from babylog.edit.commit import CommitPipeline
from babylog.edit.pending import PendingCommit
from babylog.edit.target import EditTargetTracker
from babylog.edit.value import display_value
from babylog.model.edit import EditTarget
from babylog.model.event import FocusRequested
from babylog.model.record import Record
from babylog.model.record_id import RecordId
from babylog.model.table import TableName
from babylog.service.notifier import Notifier

# amount stays in the cycle for every feeding type; the presentation layer
# hides it for non-bottle feedings
FEEDING_FIELD_ORDER: list[str] = ["feeding_type", "duration", "amount", "notes"]

SLEEP_FIELD_ORDER: list[str] = ["sleep_type", "start_time", "end_time", "notes"]


def advance(
    record_id: RecordId,
    current_field: str,
    field_order: list[str] = FEEDING_FIELD_ORDER,
) -> str:
    """The field after `current_field` within the same record, wrapping around."""
    if current_field not in field_order:
        return field_order[0]
    index = field_order.index(current_field)
    return field_order[(index + 1) % len(field_order)]


class FocusNavigator:
    """Keyboard movement between the editable fields of one record."""

    def __init__(
        self,
        table: TableName,
        tracker: EditTargetTracker,
        pipeline: CommitPipeline,
        notifier: Notifier,
        field_order: list[str] = FEEDING_FIELD_ORDER,
    ) -> None:
        self.table = table
        self.field_order = field_order
        self._tracker = tracker
        self._pipeline = pipeline
        self._notifier = notifier

    def advance(self, record_id: RecordId, current_field: str) -> str:
        return advance(record_id, current_field, self.field_order)

    def tab(
        self, record: Record, current_field: str, displayed_value: Any
    ) -> tuple[EditTarget, Optional[PendingCommit]]:
        """
        Commit the field being left if it changed, then move to the next field.

        Returns the new target and the commit scheduled for the old field, if any.
        """
        record_id = record["id"]
        if record_id is None:
            raise ValueError("cannot navigate an unsaved record")

        pending = None
        last_known = record.get(current_field)
        if display_value(displayed_value) != display_value(last_known):
            pending = self._pipeline.schedule(record_id, current_field, displayed_value)

        next_target = EditTarget(record_id, self.advance(record_id, current_field))
        # The field being left was handled above
        self._tracker.activate(next_target, run_exit=False)
        self._notifier.emit(FocusRequested(self.table, next_target))
        return next_target, pending

    def enter(
        self, record_id: RecordId, field_name: str, displayed_value: Any
    ) -> PendingCommit:
        """Commit the field without moving focus."""
        return self._pipeline.schedule(record_id, field_name, displayed_value)
