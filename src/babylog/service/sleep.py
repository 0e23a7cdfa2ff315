# SPDX-License-Identifier: MIT

import logging
from typing import Any, cast

from babylog.model.record import FieldChanges, Record
from babylog.model.record_id import RecordId
from babylog.model.sleep import SLEEP_TYPES, Sleep
from babylog.model.table import Table, TableName
from babylog.repository.sleep import SLEEP_REPO, SleepRepository
from babylog.service.storage import (
    NotFoundError,
    ValidationError,
    reject_unknown_fields,
    require_choice,
    require_datetime,
    require_optional_text,
    wrap_io_errors,
)

logger = logging.getLogger(__name__)

SLEEP_FIELDS = ["start_time", "end_time", "sleep_type", "notes"]


def validate_sleep(candidate: Sleep) -> Sleep:
    """Check a whole sleep entry before it is created."""
    for field in ["start_time", "sleep_type"]:
        if candidate.get(field) is None:
            raise ValidationError(f"Missing required field: {field}")

    end_time = candidate.get("end_time")
    return {
        "id": None,
        "start_time": require_datetime("start time", candidate["start_time"]),
        # An end before the start is kept as given; readers infer the rollover
        "end_time": None
        if end_time is None
        else require_datetime("end time", end_time),
        "sleep_type": cast(
            Any,
            require_choice("sleep type", candidate["sleep_type"], list(SLEEP_TYPES)),
        ),
        "notes": require_optional_text("notes", candidate.get("notes")),
    }


class SleepStorage:
    """Sleep table served from the local YAML repository."""

    table: TableName = Table.SLEEP

    def __init__(self, repository: SleepRepository = SLEEP_REPO) -> None:
        self._repository = repository

    async def list(self) -> list[Record]:
        with wrap_io_errors("read sleep logs"):
            sleeps = self._repository.get_all_sleeps()
        sleeps.sort(key=lambda sleep: sleep["start_time"], reverse=True)
        return cast(list[Record], sleeps)

    async def create(self, candidate: Record) -> Record:
        sleep = validate_sleep(cast(Sleep, candidate))
        with wrap_io_errors("save sleep log"):
            id = self._repository.save_new_sleep(sleep)
            self._repository.flush()
            logger.info("created sleep %s", id)
            return self._repository.get_sleep(id)

    async def update(self, id: RecordId, changes: FieldChanges) -> Record:
        reject_unknown_fields(changes, SLEEP_FIELDS, "sleep")

        start_time = None
        end_time = None
        sleep_type = None
        notes = None
        remove_end_time = False
        remove_notes = False

        if "start_time" in changes:
            if changes["start_time"] is None:
                raise ValidationError("start time is required")
            start_time = require_datetime("start time", changes["start_time"])
        if "end_time" in changes:
            if changes["end_time"] is None:
                remove_end_time = True
            else:
                end_time = require_datetime("end time", changes["end_time"])
        if "sleep_type" in changes:
            sleep_type = require_choice(
                "sleep type", changes["sleep_type"], list(SLEEP_TYPES)
            )
        if "notes" in changes:
            notes = require_optional_text("notes", changes["notes"])
            remove_notes = notes is None

        with wrap_io_errors("save sleep log"):
            if not self._repository.has_sleep(id):
                raise NotFoundError(f"Sleep log {id} not found")
            self._repository.modify_sleep(
                id,
                start_time,
                end_time,
                cast(Any, sleep_type),
                notes,
                remove_end_time,
                remove_notes,
            )
            self._repository.flush()
            logger.info("updated sleep %s: %s", id, ", ".join(changes))
            return self._repository.get_sleep(id)

    async def delete(self, id: RecordId) -> None:
        with wrap_io_errors("delete sleep log"):
            if not self._repository.has_sleep(id):
                raise NotFoundError(f"Sleep log {id} not found")
            self._repository.delete_sleep(id)
            self._repository.flush()
        logger.info("deleted sleep %s", id)
