# SPDX-License-Identifier: MIT

import asyncio
import logging
from typing import Any, Optional

from babylog.edit.highlight import HighlightSignal
from babylog.edit.pending import PendingCommit
from babylog.edit.target import EditTargetTracker
from babylog.edit.value import coerce_value
from babylog.model.edit import CommitOutcome, CommitStatus, EditTarget
from babylog.model.event import (
    CommitFailed,
    CommitStarted,
    CommitSucceeded,
    Notice,
    NoticeLevel,
)
from babylog.model.record import Record
from babylog.model.record_id import RecordId
from babylog.model.table import Table, TableName
from babylog.service.list_cache import ListCache
from babylog.service.notifier import Notifier
from babylog.service.storage import (
    NotFoundError,
    RecordStorage,
    StorageError,
    ValidationError,
)

logger = logging.getLogger(__name__)

RECORD_NOUNS: dict[str, str] = {
    Table.FEEDINGS: "Feeding log",
    Table.SLEEP: "Sleep log",
}


class CommitPipeline:
    """
    Sends edited field values to storage.

    Each (record, field) has at most one pending commit. A newer value for
    the same key cancels a commit that is still waiting out its settle delay;
    if the older one is already in flight the newer one waits for it, so per
    key there is never more than one request outstanding.
    """

    def __init__(
        self,
        table: TableName,
        storage: RecordStorage,
        cache: ListCache,
        tracker: EditTargetTracker,
        highlight: HighlightSignal,
        notifier: Notifier,
        settle_delay: float = 0.0,
    ) -> None:
        self.table = table
        self.settle_delay = settle_delay
        self._storage = storage
        self._cache = cache
        self._tracker = tracker
        self._highlight = highlight
        self._notifier = notifier
        self._pending: dict[EditTarget, PendingCommit] = {}
        self._saving: set[EditTarget] = set()

    @property
    def record_noun(self) -> str:
        return RECORD_NOUNS.get(self.table, "Record")

    def schedule(
        self, record_id: RecordId, field_name: str, raw_value: Any
    ) -> PendingCommit:
        target = EditTarget(record_id, field_name)
        loop = asyncio.get_running_loop()

        in_flight: Optional[asyncio.Task[CommitOutcome]] = None
        previous = self._pending.get(target)
        if previous is not None:
            if previous.cancel():
                logger.debug("superseded pending commit for %s", target)
            elif previous.task is not None and not previous.task.done():
                in_flight = previous.task

        pending = PendingCommit(target, raw_value, loop.time())
        pending.task = loop.create_task(self.__run(pending, in_flight))
        pending.task.add_done_callback(lambda _: self.__forget(pending))
        self._pending[target] = pending
        logger.debug(
            "scheduled commit for %s in %.3fs", target, self.settle_delay
        )
        return pending

    async def commit(
        self, record_id: RecordId, field_name: str, raw_value: Any
    ) -> CommitOutcome:
        return await self.schedule(record_id, field_name, raw_value).outcome()

    def cancel_pending(self, record_id: RecordId, field_name: str) -> bool:
        pending = self._pending.get(EditTarget(record_id, field_name))
        if pending is None or not pending.cancel():
            return False
        logger.debug("cancelled pending commit for %s", pending.target)
        return True

    def cancel_all(self) -> None:
        for pending in list(self._pending.values()):
            pending.cancel()

    def pending(self, record_id: RecordId, field_name: str) -> Optional[PendingCommit]:
        return self._pending.get(EditTarget(record_id, field_name))

    def is_saving(self, record_id: RecordId, field_name: str) -> bool:
        return EditTarget(record_id, field_name) in self._saving

    async def drain(self) -> None:
        """Wait until every scheduled commit has resolved."""
        while self._pending:
            tasks = [
                pending.task
                for pending in self._pending.values()
                if pending.task is not None
            ]
            await asyncio.wait(tasks)

    def __forget(self, pending: PendingCommit) -> None:
        if self._pending.get(pending.target) is pending:
            del self._pending[pending.target]

    async def __run(
        self,
        pending: PendingCommit,
        in_flight: Optional[asyncio.Task[CommitOutcome]],
    ) -> CommitOutcome:
        if self.settle_delay > 0:
            await asyncio.sleep(self.settle_delay)
        if in_flight is not None:
            await asyncio.wait([in_flight])
        pending.dispatching = True
        return await self.__dispatch(pending.target, pending.candidate_value)

    async def __dispatch(self, target: EditTarget, raw_value: Any) -> CommitOutcome:
        try:
            value = coerce_value(target.field_name, raw_value)
        except ValueError as e:
            return self.__fail(target, raw_value, str(e))

        self._saving.add(target)
        self._notifier.emit(CommitStarted(self.table, target, value))
        logger.debug("dispatching %s = %r", target, value)
        try:
            try:
                await self._storage.update(
                    target.record_id, {target.field_name: value}
                )
            finally:
                self._saving.discard(target)
        except NotFoundError as e:
            outcome = self.__fail(target, value, str(e))
            await self._cache.invalidate(self.table)
            return outcome
        except ValidationError as e:
            return self.__fail(target, value, str(e))
        except StorageError as e:
            return self.__fail(target, value, "Failed to save changes", e)

        self._highlight.mark(target.record_id, target.field_name)
        # A saved record leaves edit mode, whichever of its fields is open now
        self._tracker.release_record(target.record_id)
        await self._cache.invalidate(self.table)

        self._notifier.emit(CommitSucceeded(self.table, target, value))
        self._notifier.emit(Notice(NoticeLevel.SUCCESS, "Changes saved successfully"))
        return CommitOutcome(CommitStatus.SUCCEEDED, target, value)

    def __fail(
        self,
        target: EditTarget,
        value: Any,
        message: str,
        cause: Optional[Exception] = None,
    ) -> CommitOutcome:
        logger.warning(
            "commit for %s failed: %s", target, cause if cause is not None else message
        )
        # Nothing was applied locally, so there is nothing to roll back
        self._tracker.release_record(target.record_id)
        self._notifier.emit(CommitFailed(self.table, target, message))
        self._notifier.emit(Notice(NoticeLevel.ERROR, message, "Error"))
        return CommitOutcome(CommitStatus.FAILED, target, value, message)

    async def create(self, candidate: Record) -> Optional[Record]:
        """Save a whole new record, bypassing targets and settle delays."""
        try:
            created = await self._storage.create(candidate)
        except ValidationError as e:
            logger.warning("create %s failed: %s", self.table, e)
            self._notifier.emit(Notice(NoticeLevel.ERROR, str(e), "Error"))
            return None
        except StorageError as e:
            logger.warning("create %s failed: %s", self.table, e)
            self._notifier.emit(
                Notice(
                    NoticeLevel.ERROR,
                    f"Failed to save {self.record_noun.lower()}",
                    "Error",
                )
            )
            return None

        await self._cache.invalidate(self.table)
        self._notifier.emit(
            Notice(
                NoticeLevel.SUCCESS,
                f"{self.record_noun} added successfully",
                "Success",
            )
        )
        return created

    async def delete(self, record_id: RecordId) -> bool:
        """Delete a record; callers are expected to have confirmed first."""
        try:
            await self._storage.delete(record_id)
        except StorageError as e:
            logger.warning("delete %s %s failed: %s", self.table, record_id, e)
            self._notifier.emit(
                Notice(
                    NoticeLevel.ERROR,
                    f"Failed to delete {self.record_noun.lower()}",
                    "Error",
                )
            )
            if isinstance(e, NotFoundError):
                await self._cache.invalidate(self.table)
            return False

        await self._cache.invalidate(self.table)
        self._notifier.emit(
            Notice(
                NoticeLevel.SUCCESS,
                f"{self.record_noun} deleted successfully",
                "Success",
            )
        )
        return True
