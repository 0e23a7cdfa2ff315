# SPDX-License-Identifier: MIT

from enum import StrEnum
from typing import Any, NamedTuple, Optional

from babylog.model.record_id import RecordId


class EditTarget(NamedTuple):
    record_id: RecordId
    field_name: str


class HighlightMark(NamedTuple):
    record_id: RecordId
    field_name: str
    expires_at: float  # event loop time


class CommitStatus(StrEnum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELLED = "cancelled"


class CommitOutcome(NamedTuple):
    status: CommitStatus
    target: EditTarget
    value: Any = None
    message: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status == CommitStatus.SUCCEEDED


class ExitPolicy(StrEnum):
    """What leaving a target without Enter/Tab does to its draft value."""

    COMMIT = "commit"
    DISCARD = "discard"
