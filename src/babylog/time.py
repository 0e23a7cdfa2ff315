# SPDX-License-Identifier: MIT

import re
from typing import Optional, cast

import pendulum

from babylog.model.duration import Clock

_CLOCK_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")


def now_utc() -> pendulum.DateTime:
    return pendulum.now("UTC")


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    return datetime.isoformat()


def datetime_to_iso_str_optional(
    datetime: Optional[pendulum.DateTime],
) -> Optional[str]:
    if datetime is None:
        return None
    return datetime_to_iso_str(datetime)


def datetime_from_str(datetime: str) -> pendulum.DateTime:
    return cast(pendulum.DateTime, pendulum.parse(datetime))


def datetime_from_str_optional(datetime: Optional[str]) -> Optional[pendulum.DateTime]:
    if datetime is None:
        return None
    return datetime_from_str(datetime)


def datetime_to_display_local_datetime_str(datetime: pendulum.DateTime) -> str:
    return datetime.in_tz("local").format("MMM-DD ddd HH:mm")


def datetime_to_display_local_datetime_str_optional(
    datetime: Optional[pendulum.DateTime],
) -> Optional[str]:
    if datetime is None:
        return None
    return datetime_to_display_local_datetime_str(datetime)


def clock_from_str(clock: str) -> Clock:
    """
    Parse a clock string in (H)H:mm format.

    Raises:
        ValueError: If the format is invalid or the values are out of range
    """
    match = _CLOCK_PATTERN.match(clock.strip())
    if not match:
        raise ValueError(f"Time must be in HH:mm format, got '{clock}'")

    hour = int(match.group(1))
    minute = int(match.group(2))
    if hour < 0 or hour > 23:
        raise ValueError(f"Hour must be between 0 and 23, got {hour}")
    if minute < 0 or minute > 59:
        raise ValueError(f"Minute must be between 0 and 59, got {minute}")
    return Clock(hour, minute)


def clock_of(datetime: pendulum.DateTime) -> Clock:
    """Local wall-clock portion of a datetime."""
    local = datetime.in_tz("local")
    return Clock(local.hour, local.minute)


def local_date_at_clock(date: pendulum.Date, clock: Clock) -> pendulum.DateTime:
    """The local datetime for a clock on a date, converted to UTC."""
    local = pendulum.datetime(
        date.year, date.month, date.day, clock.hour, clock.minute, tz="local"
    )
    return local.in_tz("UTC")
