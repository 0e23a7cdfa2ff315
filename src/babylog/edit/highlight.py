# SPDX-License-Identifier: MIT

import asyncio
from typing import Optional

from babylog.model.edit import EditTarget, HighlightMark
from babylog.model.event import HighlightCleared, HighlightStarted
from babylog.model.record_id import RecordId
from babylog.model.table import TableName
from babylog.service.notifier import Notifier

DEFAULT_HIGHLIGHT_WINDOW = 1.0  # seconds


class HighlightSignal:
    """Short-lived confirmation marks on fields that were just saved."""

    def __init__(
        self,
        table: TableName,
        notifier: Notifier,
        window: float = DEFAULT_HIGHLIGHT_WINDOW,
    ) -> None:
        self.table = table
        self.window = window
        self._notifier = notifier
        self._marks: dict[EditTarget, HighlightMark] = {}
        self._handles: dict[EditTarget, asyncio.TimerHandle] = {}

    def mark(self, record_id: RecordId, field_name: str) -> HighlightMark:
        key = EditTarget(record_id, field_name)
        loop = asyncio.get_running_loop()

        # A repeated mark moves the expiry instead of stacking a second one
        handle = self._handles.pop(key, None)
        if handle is not None:
            handle.cancel()

        mark = HighlightMark(record_id, field_name, loop.time() + self.window)
        self._marks[key] = mark
        self._handles[key] = loop.call_later(self.window, self.__expire, key)
        self._notifier.emit(HighlightStarted(self.table, mark))
        return mark

    def __expire(self, key: EditTarget) -> None:
        self._handles.pop(key, None)
        if self._marks.pop(key, None) is not None:
            self._notifier.emit(HighlightCleared(self.table, *key))

    def get(self, record_id: RecordId, field_name: str) -> Optional[HighlightMark]:
        return self._marks.get(EditTarget(record_id, field_name))

    def is_highlighted(self, record_id: RecordId, field_name: str) -> bool:
        return EditTarget(record_id, field_name) in self._marks

    @property
    def marks(self) -> list[HighlightMark]:
        return list(self._marks.values())

    def clear(self) -> None:
        for handle in self._handles.values():
            handle.cancel()
        self._handles.clear()
        self._marks.clear()
