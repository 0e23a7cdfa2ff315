# SPDX-License-Identifier: MIT

from enum import StrEnum
from typing import Any, NamedTuple, Optional

from babylog.model.edit import EditTarget, HighlightMark
from babylog.model.record_id import RecordId
from babylog.model.table import TableName


class NoticeLevel(StrEnum):
    SUCCESS = "success"
    ERROR = "error"


class TargetChanged(NamedTuple):
    table: TableName
    previous: Optional[EditTarget]
    current: Optional[EditTarget]


class CommitStarted(NamedTuple):
    table: TableName
    target: EditTarget
    value: Any


class CommitSucceeded(NamedTuple):
    table: TableName
    target: EditTarget
    value: Any


class CommitFailed(NamedTuple):
    table: TableName
    target: EditTarget
    message: str


class HighlightStarted(NamedTuple):
    table: TableName
    mark: HighlightMark


class HighlightCleared(NamedTuple):
    table: TableName
    record_id: RecordId
    field_name: str


class FocusRequested(NamedTuple):
    table: TableName
    target: EditTarget


class ListRefreshed(NamedTuple):
    table: TableName
    count: int


class Notice(NamedTuple):
    level: NoticeLevel
    message: str
    title: Optional[str] = None


type Event = (
    TargetChanged
    | CommitStarted
    | CommitSucceeded
    | CommitFailed
    | HighlightStarted
    | HighlightCleared
    | FocusRequested
    | ListRefreshed
    | Notice
)
