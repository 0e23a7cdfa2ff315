# SPDX-License-Identifier: MIT

import datetime
from contextlib import contextmanager
from typing import Any, Iterator, Protocol

import pendulum
from yaml import YAMLError

from babylog.model.record import FieldChanges, Record
from babylog.model.record_id import RecordId
from babylog.model.table import TableName


class StorageError(Exception):
    """Base class for failures reported by a record storage."""

    pass


class ValidationError(StorageError):
    """Raised when a record or field value has the wrong shape or range."""

    pass


class NotFoundError(StorageError):
    """Raised when the target record does not exist (anymore)."""

    pass


class TransportError(StorageError):
    """Raised when the storage cannot be reached or read/written."""

    pass


class RecordStorage(Protocol):
    """Request/response interface of the storage for one record table."""

    table: TableName

    async def list(self) -> list[Record]: ...

    async def create(self, candidate: Record) -> Record: ...

    async def update(self, id: RecordId, changes: FieldChanges) -> Record: ...

    async def delete(self, id: RecordId) -> None: ...


def require_datetime(field_name: str, value: Any) -> pendulum.DateTime:
    if isinstance(value, pendulum.DateTime):
        return value
    if isinstance(value, datetime.datetime):
        return pendulum.instance(value)
    raise ValidationError(f"{field_name} must be a date and time")


def require_choice(field_name: str, value: Any, choices: list[str]) -> str:
    if value not in choices:
        raise ValidationError(
            f"Invalid {field_name}: {value}. Valid options: {', '.join(choices)}"
        )
    return value


def require_optional_text(field_name: str, value: Any) -> Any:
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"{field_name} must be text")
    return value


def reject_unknown_fields(
    changes: FieldChanges, editable_fields: list[str], table: str
) -> None:
    if "id" in changes:
        raise ValidationError("id cannot be changed")
    unknown = [field for field in changes if field not in editable_fields]
    if len(unknown) > 0:
        raise ValidationError(f"Unknown {table} field(s): {', '.join(unknown)}")


@contextmanager
def wrap_io_errors(action: str) -> Iterator[None]:
    """Re-raise file and YAML errors from a repository as `TransportError`."""
    try:
        yield
    except (OSError, YAMLError) as e:
        raise TransportError(f"Failed to {action}: {e}") from e
