# SPDX-License-Identifier: MIT

import asyncio
from typing import Any, Optional

from babylog.model.edit import CommitOutcome, CommitStatus, EditTarget
from babylog.model.record_id import RecordId


class PendingCommit:
    """
    A value waiting to be sent to storage for one (record, field).

    It can be cancelled until its settle delay has run out and the dispatch
    has started; after that it runs to completion.
    """

    def __init__(
        self, target: EditTarget, candidate_value: Any, scheduled_at: float
    ) -> None:
        self.target = target
        self.candidate_value = candidate_value
        self.scheduled_at = scheduled_at
        self.dispatching = False
        self.task: Optional[asyncio.Task[CommitOutcome]] = None

    @property
    def record_id(self) -> RecordId:
        return self.target.record_id

    @property
    def field_name(self) -> str:
        return self.target.field_name

    @property
    def done(self) -> bool:
        return self.task is not None and self.task.done()

    @property
    def cancelled(self) -> bool:
        return self.task is not None and self.task.cancelled()

    def cancel(self) -> bool:
        if self.task is None or self.dispatching or self.task.done():
            return False
        return self.task.cancel()

    async def outcome(self) -> CommitOutcome:
        """Wait for the commit to resolve; a cancelled commit resolves as CANCELLED."""
        if self.task is None:
            raise RuntimeError("pending commit was never scheduled")
        await asyncio.wait([self.task])
        if self.task.cancelled():
            return CommitOutcome(
                CommitStatus.CANCELLED, self.target, self.candidate_value
            )
        return self.task.result()
