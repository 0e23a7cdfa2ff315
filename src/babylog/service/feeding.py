# SPDX-License-Identifier: MIT

import logging
from typing import Any, Optional, cast

from babylog.model.feeding import FEEDING_TYPES, Feeding
from babylog.model.record import FieldChanges, Record
from babylog.model.record_id import RecordId
from babylog.model.table import Table, TableName
from babylog.repository.feeding import FEEDING_REPO, FeedingRepository
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

FEEDING_FIELDS = ["timestamp", "feeding_type", "duration", "amount", "notes"]


def validate_duration(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError("Duration must be a whole number of minutes")
    if value < 1:
        raise ValidationError("Duration must be at least 1 minute")
    return value


def validate_amount(value: Any) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError("Amount must be a number of ounces")
    if value < 0:
        raise ValidationError("Amount cannot be negative")
    return float(value)


def validate_feeding(candidate: Feeding) -> Feeding:
    """Check a whole feeding before it is created."""
    for field in ["timestamp", "feeding_type", "duration"]:
        if candidate.get(field) is None:
            raise ValidationError(f"Missing required field: {field}")

    return {
        "id": None,
        "timestamp": require_datetime("timestamp", candidate["timestamp"]),
        "feeding_type": cast(
            Any,
            require_choice(
                "feeding type", candidate["feeding_type"], list(FEEDING_TYPES)
            ),
        ),
        "duration": validate_duration(candidate["duration"]),
        "amount": validate_amount(candidate.get("amount")),
        "notes": require_optional_text("notes", candidate.get("notes")),
    }


class FeedingStorage:
    """Feedings table served from the local YAML repository."""

    table: TableName = Table.FEEDINGS

    def __init__(self, repository: FeedingRepository = FEEDING_REPO) -> None:
        self._repository = repository

    async def list(self) -> list[Record]:
        with wrap_io_errors("read feedings"):
            feedings = self._repository.get_all_feedings()
        feedings.sort(key=lambda feeding: feeding["timestamp"], reverse=True)
        return cast(list[Record], feedings)

    async def create(self, candidate: Record) -> Record:
        feeding = validate_feeding(cast(Feeding, candidate))
        with wrap_io_errors("save feeding"):
            id = self._repository.save_new_feeding(feeding)
            self._repository.flush()
            logger.info("created feeding %s", id)
            return self._repository.get_feeding(id)

    async def update(self, id: RecordId, changes: FieldChanges) -> Record:
        reject_unknown_fields(changes, FEEDING_FIELDS, "feeding")

        timestamp = None
        feeding_type = None
        duration = None
        amount = None
        notes = None
        remove_amount = False
        remove_notes = False

        if "timestamp" in changes:
            timestamp = require_datetime("timestamp", changes["timestamp"])
        if "feeding_type" in changes:
            feeding_type = require_choice(
                "feeding type", changes["feeding_type"], list(FEEDING_TYPES)
            )
        if "duration" in changes:
            duration = validate_duration(changes["duration"])
        if "amount" in changes:
            amount = validate_amount(changes["amount"])
            remove_amount = amount is None
        if "notes" in changes:
            notes = require_optional_text("notes", changes["notes"])
            remove_notes = notes is None

        with wrap_io_errors("save feeding"):
            if not self._repository.has_feeding(id):
                raise NotFoundError(f"Feeding {id} not found")
            self._repository.modify_feeding(
                id,
                timestamp,
                cast(Any, feeding_type),
                duration,
                amount,
                notes,
                remove_amount,
                remove_notes,
            )
            self._repository.flush()
            logger.info("updated feeding %s: %s", id, ", ".join(changes))
            return self._repository.get_feeding(id)

    async def delete(self, id: RecordId) -> None:
        with wrap_io_errors("delete feeding"):
            if not self._repository.has_feeding(id):
                raise NotFoundError(f"Feeding {id} not found")
            self._repository.delete_feeding(id)
            self._repository.flush()
        logger.info("deleted feeding %s", id)
