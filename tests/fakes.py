# SPDX-License-Identifier: MIT

import asyncio
from copy import deepcopy
from typing import Any, Optional

import pendulum

from babylog.model.feeding import Feeding
from babylog.model.record import FieldChanges, Record
from babylog.model.record_id import RecordId
from babylog.model.sleep import Sleep
from babylog.model.table import TableName
from babylog.service.notifier import Notifier
from babylog.service.storage import NotFoundError, StorageError


class FakeStorage:
    """In-memory record storage that records every request it receives."""

    def __init__(self, table: TableName, records: Optional[list[Record]] = None) -> None:
        self.table = table
        self.records: dict[RecordId, Record] = {}
        for record in records or []:
            self.records[record["id"]] = deepcopy(record)  # type: ignore[index]
        self.updates: list[tuple[RecordId, FieldChanges]] = []
        self.list_calls = 0
        # Set to make the next update()/list() raise
        self.update_error: Optional[StorageError] = None
        self.list_error: Optional[StorageError] = None
        # Cleared to hold update() or list() in flight until set again
        self.gate = asyncio.Event()
        self.gate.set()
        self.list_gate = asyncio.Event()
        self.list_gate.set()

    async def list(self) -> list[Record]:
        self.list_calls += 1
        await self.list_gate.wait()
        if self.list_error is not None:
            error, self.list_error = self.list_error, None
            raise error
        return [deepcopy(record) for record in self.records.values()]

    async def create(self, candidate: Record) -> Record:
        record = deepcopy(candidate)
        record["id"] = max(self.records, default=0) + 1
        self.records[record["id"]] = record
        return deepcopy(record)

    async def update(self, id: RecordId, changes: FieldChanges) -> Record:
        self.updates.append((id, dict(changes)))
        await self.gate.wait()
        if self.update_error is not None:
            error, self.update_error = self.update_error, None
            raise error
        if id not in self.records:
            raise NotFoundError(f"record {id} not found")
        self.records[id].update(changes)  # type: ignore[typeddict-item]
        return deepcopy(self.records[id])

    async def delete(self, id: RecordId) -> None:
        if id not in self.records:
            raise NotFoundError(f"record {id} not found")
        del self.records[id]


class EventLog:
    """Notifier listener that keeps every event it sees."""

    def __init__(self, notifier: Notifier) -> None:
        self.events: list[Any] = []
        notifier.subscribe(self.events.append)

    def of_type(self, event_type: type) -> list[Any]:
        return [event for event in self.events if isinstance(event, event_type)]


def make_feeding(id: RecordId, **overrides: Any) -> Feeding:
    feeding: Feeding = {
        "id": id,
        "timestamp": pendulum.datetime(2024, 3, 1, 8, 0),
        "feeding_type": "breast",
        "duration": 20,
        "amount": None,
        "notes": None,
    }
    feeding.update(overrides)  # type: ignore[typeddict-item]
    return feeding


def make_sleep(id: RecordId, **overrides: Any) -> Sleep:
    sleep: Sleep = {
        "id": id,
        "start_time": pendulum.datetime(2024, 3, 1, 13, 0),
        "end_time": pendulum.datetime(2024, 3, 1, 14, 30),
        "sleep_type": "nap",
        "notes": None,
    }
    sleep.update(overrides)  # type: ignore[typeddict-item]
    return sleep
