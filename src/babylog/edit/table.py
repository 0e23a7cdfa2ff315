# SPDX-License-Identifier: MIT

import logging
from typing import Any, NamedTuple, Optional

from babylog.configuration import Configuration
from babylog.edit.commit import CommitPipeline
from babylog.edit.highlight import DEFAULT_HIGHLIGHT_WINDOW, HighlightSignal
from babylog.edit.navigator import (
    FEEDING_FIELD_ORDER,
    SLEEP_FIELD_ORDER,
    FocusNavigator,
)
from babylog.edit.pending import PendingCommit
from babylog.edit.target import EditTargetTracker
from babylog.edit.value import display_value
from babylog.model.edit import EditTarget, ExitPolicy
from babylog.model.record import Record
from babylog.model.record_id import RecordId
from babylog.model.table import Table, TableName
from babylog.service.list_cache import ListCache
from babylog.service.notifier import Notifier
from babylog.service.storage import RecordStorage

logger = logging.getLogger(__name__)


class TableSettings(NamedTuple):
    settle_delay: float  # seconds
    exit_policy: ExitPolicy
    field_order: list[str]
    # Fields whose every change is committed (selects, or everything when debounced)
    commit_on_change: frozenset[str]
    commit_on_blur: bool
    highlight_window: float = DEFAULT_HIGHLIGHT_WINDOW


def feeding_settings(config: Optional[Configuration] = None) -> TableSettings:
    delay_ms = 0 if config is None else config["feeding_settle_delay_ms"]
    window_ms = 1000 if config is None else config["highlight_window_ms"]
    return TableSettings(
        settle_delay=delay_ms / 1000,
        exit_policy=ExitPolicy.COMMIT,
        field_order=FEEDING_FIELD_ORDER,
        commit_on_change=frozenset({"feeding_type"}),
        commit_on_blur=True,
        highlight_window=window_ms / 1000,
    )


def sleep_settings(config: Optional[Configuration] = None) -> TableSettings:
    delay_ms = 500 if config is None else config["sleep_settle_delay_ms"]
    window_ms = 1000 if config is None else config["highlight_window_ms"]
    return TableSettings(
        settle_delay=delay_ms / 1000,
        exit_policy=ExitPolicy.DISCARD,
        field_order=SLEEP_FIELD_ORDER,
        commit_on_change=frozenset(SLEEP_FIELD_ORDER),
        commit_on_blur=False,
        highlight_window=window_ms / 1000,
    )


def settings_for(table: TableName, config: Optional[Configuration] = None) -> TableSettings:
    if table == Table.FEEDINGS:
        return feeding_settings(config)
    return sleep_settings(config)


class EditableTable:
    """
    Inline editing for one table of records.

    Input events from the presentation layer come in through click/enter/
    change/blur/tab/escape/outside_click; outcomes go out through the
    notifier. Each instance owns its own edit target, so two tables never
    interfere with each other.
    """

    def __init__(
        self,
        table: TableName,
        storage: RecordStorage,
        cache: ListCache,
        notifier: Notifier,
        settings: Optional[TableSettings] = None,
    ) -> None:
        self.table = table
        self.settings = settings if settings is not None else settings_for(table)
        self._cache = cache
        self._cache.register(storage)
        self._notifier = notifier
        self._draft: Any = None
        self._delete_confirmation: Optional[RecordId] = None

        self.tracker = EditTargetTracker(table, notifier, self.__exit_target)
        self.highlight = HighlightSignal(
            table, notifier, self.settings.highlight_window
        )
        self.pipeline = CommitPipeline(
            table,
            storage,
            cache,
            self.tracker,
            self.highlight,
            notifier,
            self.settings.settle_delay,
        )
        self.navigator = FocusNavigator(
            table, self.tracker, self.pipeline, notifier, self.settings.field_order
        )

    async def load(self) -> list[Record]:
        return await self._cache.get(self.table)

    @property
    def records(self) -> list[Record]:
        return self._cache.peek(self.table) or []

    @property
    def current_target(self) -> Optional[EditTarget]:
        return self.tracker.current

    @property
    def draft(self) -> Any:
        return self._draft

    @property
    def delete_confirmation(self) -> Optional[RecordId]:
        return self._delete_confirmation

    def record(self, record_id: RecordId) -> Record:
        record = self._cache.find(self.table, record_id)
        if record is None:
            raise KeyError(f"{self.table} record {record_id} is not loaded")
        return record

    def is_saving(self, record_id: RecordId, field_name: str) -> bool:
        return self.pipeline.is_saving(record_id, field_name)

    def is_highlighted(self, record_id: RecordId, field_name: str) -> bool:
        return self.highlight.is_highlighted(record_id, field_name)

    # Input events

    def click(self, record_id: RecordId, field_name: str) -> None:
        self.__activate(EditTarget(record_id, field_name))

    def enter(self, record_id: RecordId, field_name: str) -> Optional[PendingCommit]:
        target = EditTarget(record_id, field_name)
        if self.tracker.current != target:
            self.__activate(target)
            return None
        return self.navigator.enter(record_id, field_name, self._draft)

    def change(self, value: Any) -> Optional[PendingCommit]:
        target = self.tracker.current
        if target is None:
            return None
        self._draft = value
        if target.field_name in self.settings.commit_on_change:
            return self.pipeline.schedule(target.record_id, target.field_name, value)
        return None

    def blur(self) -> Optional[PendingCommit]:
        target = self.tracker.current
        if target is None or not self.settings.commit_on_blur:
            return None
        if target.field_name in self.settings.commit_on_change:
            return None
        return self.pipeline.schedule(target.record_id, target.field_name, self._draft)

    def tab(self) -> Optional[PendingCommit]:
        target = self.tracker.current
        if target is None:
            return None
        record = self._cache.find(self.table, target.record_id)
        if record is None:
            logger.debug("%s is no longer listed, leaving it", target)
            self._draft = None
            self.tracker.cancel()
            return None
        next_target, pending = self.navigator.tab(
            record, target.field_name, self._draft
        )
        self._draft = self.__displayed(next_target)
        return pending

    def escape(self) -> None:
        target = self.tracker.current
        if target is None:
            return
        self.pipeline.cancel_pending(target.record_id, target.field_name)
        self._draft = None
        self.tracker.cancel()

    def outside_click(self) -> None:
        self.tracker.leave()

    # Whole-record operations

    async def create(self, candidate: Record) -> Optional[Record]:
        return await self.pipeline.create(candidate)

    def request_delete(self, record_id: RecordId) -> None:
        self._delete_confirmation = record_id

    def cancel_delete(self) -> None:
        self._delete_confirmation = None

    async def confirm_delete(self) -> bool:
        record_id = self._delete_confirmation
        if record_id is None:
            return False
        deleted = await self.pipeline.delete(record_id)
        if deleted:
            self._delete_confirmation = None
        return deleted

    async def drain(self) -> None:
        await self.pipeline.drain()

    def close(self) -> None:
        """Drop all transient state, as when navigating away from the table."""
        self.pipeline.cancel_all()
        self.highlight.clear()
        self._draft = None
        self.tracker.cancel()

    def __activate(self, target: EditTarget) -> None:
        if self.tracker.current == target:
            return
        self.tracker.activate(target)
        self._draft = self.__displayed(target)

    def __displayed(self, target: EditTarget) -> str:
        record = self._cache.find(self.table, target.record_id)
        if record is None:
            return ""
        return display_value(record.get(target.field_name))

    def __exit_target(self, previous: EditTarget) -> None:
        if self.settings.exit_policy == ExitPolicy.COMMIT:
            if previous.field_name in self.settings.commit_on_change:
                # Every change was scheduled as it happened
                logger.debug("nothing left to commit for %s on exit", previous)
            else:
                logger.debug("committing %s on exit", previous)
                self.pipeline.schedule(
                    previous.record_id, previous.field_name, self._draft
                )
        else:
            logger.debug("discarding %s on exit", previous)
            self.pipeline.cancel_pending(previous.record_id, previous.field_name)
        self._draft = None
