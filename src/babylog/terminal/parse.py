# SPDX-License-Identifier: MIT

import re
from typing import Optional

import pendulum
import typer

from babylog.model.duration import Clock
from babylog.time import clock_from_str


def parse_clock(clock_param: Optional[str]) -> Optional[Clock]:
    """
    Parse a clock option in (H)H:mm format.

    Raises:
        typer.BadParameter: If the time format is invalid or values are out of range
    """
    if clock_param is None:
        return None
    try:
        return clock_from_str(clock_param)
    except ValueError as e:
        raise typer.BadParameter(str(e))


def parse_date(date_param: Optional[str]) -> Optional[pendulum.Date]:
    """
    Parse a date option.

    valid inputs: YYYY-MM-DD, today/t, yesterday/y, or a day offset like -1
    """
    if date_param is None:
        return None

    date = str(date_param).strip()
    today = pendulum.today("local").date()

    if re.match(r"^\d{4}-\d{2}-\d{2}$", date):
        try:
            parsed = pendulum.parse(date, tz="local")
        except ValueError as e:
            raise typer.BadParameter(f"Invalid date: {e}")
        if isinstance(parsed, pendulum.DateTime):
            return parsed.date()
        if isinstance(parsed, pendulum.Date):
            return parsed
        raise typer.BadParameter(f"Invalid date: {date}")

    if re.match(r"^-?\d+$", date):
        return today.add(days=int(date))
    if date == "today" or date == "t":
        return today
    if date == "yesterday" or date == "y":
        return today.subtract(days=1)
    raise typer.BadParameter("Incorrect date format")
