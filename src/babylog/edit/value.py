# SPDX-License-Identifier: MIT

from typing import Any

import pendulum

from babylog import time


def coerce_value(field_name: str, raw_value: Any) -> Any:
    """
    Turn what the user entered into the value sent to storage.

    amount: float, or None when left empty
    duration: whole minutes
    start_time / end_time: datetime (an empty end time reopens the sleep)
    anything else is passed through as entered

    Raises:
        ValueError: If the entered text cannot be read for the field
    """
    if field_name == "amount":
        if raw_value is None:
            return None
        if isinstance(raw_value, str):
            if raw_value.strip() == "":
                return None
            try:
                return float(raw_value)
            except ValueError:
                raise ValueError(f"Amount must be a number, got '{raw_value}'")
        return float(raw_value)

    if field_name == "duration":
        if isinstance(raw_value, int) and not isinstance(raw_value, bool):
            return raw_value
        try:
            return int(str(raw_value).strip())
        except ValueError:
            raise ValueError(
                f"Duration must be a whole number of minutes, got '{raw_value}'"
            )

    if field_name in ("start_time", "end_time"):
        if isinstance(raw_value, pendulum.DateTime):
            return raw_value
        if raw_value is None or str(raw_value).strip() == "":
            if field_name == "end_time":
                return None
            raise ValueError("Start time is required")
        parsed = pendulum.parse(str(raw_value))
        if not isinstance(parsed, pendulum.DateTime):
            raise ValueError(f"Expected a date and time, got '{raw_value}'")
        return parsed

    return raw_value


def display_value(value: Any) -> str:
    """The text an input shows for a stored value."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, pendulum.DateTime):
        return time.datetime_to_iso_str(value)
    return str(value)
