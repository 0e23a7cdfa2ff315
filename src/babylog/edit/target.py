# SPDX-License-Identifier: MIT

import logging
from typing import Callable, Optional

from babylog.model.edit import EditTarget
from babylog.model.event import TargetChanged
from babylog.model.record_id import RecordId
from babylog.model.table import TableName
from babylog.service.notifier import Notifier

logger = logging.getLogger(__name__)

type ExitHandler = Callable[[EditTarget], None]


class EditTargetTracker:
    """
    Which (record, field) of one table is open for inline editing.

    Idle is `current is None`. Leaving a target other than by Escape or a
    resolved commit runs the exit handler for it first.
    """

    def __init__(
        self,
        table: TableName,
        notifier: Notifier,
        exit_handler: Optional[ExitHandler] = None,
    ) -> None:
        self.table = table
        self._notifier = notifier
        self._exit_handler = exit_handler
        self._current: Optional[EditTarget] = None

    @property
    def current(self) -> Optional[EditTarget]:
        return self._current

    @property
    def is_idle(self) -> bool:
        return self._current is None

    def is_editing(self, record_id: RecordId, field_name: Optional[str] = None) -> bool:
        if self._current is None or self._current.record_id != record_id:
            return False
        return field_name is None or self._current.field_name == field_name

    def activate(self, target: EditTarget, run_exit: bool = True) -> None:
        if self._current == target:
            return
        previous = self._current
        if previous is not None and run_exit and self._exit_handler is not None:
            self._exit_handler(previous)
        self.__set(target)

    def leave(self) -> None:
        """Back to Idle, running exit processing for the current target."""
        if self._current is None:
            return
        if self._exit_handler is not None:
            self._exit_handler(self._current)
        self.__set(None)

    def cancel(self) -> None:
        """Back to Idle without exit processing."""
        self.__set(None)

    def release_record(self, record_id: RecordId) -> bool:
        """Back to Idle if any field of `record_id` is being edited."""
        if not self.is_editing(record_id):
            return False
        self.__set(None)
        return True

    def __set(self, target: Optional[EditTarget]) -> None:
        previous = self._current
        if previous == target:
            return
        self._current = target
        logger.debug("%s edit target: %s -> %s", self.table, previous, target)
        self._notifier.emit(TargetChanged(self.table, previous, target))
