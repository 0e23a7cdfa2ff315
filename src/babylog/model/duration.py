# SPDX-License-Identifier: MIT

from enum import StrEnum
from typing import NamedTuple


class DurationClassification(StrEnum):
    BELOW_RECOMMENDED = "below_recommended"
    WITHIN_RECOMMENDED = "within_recommended"
    ABOVE_RECOMMENDED = "above_recommended"


class RecommendedRange(NamedTuple):
    min_minutes: int
    max_minutes: int


class Clock(NamedTuple):
    """Wall-clock time of day without a date."""

    hour: int
    minute: int

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


class Preset(NamedTuple):
    label: str
    hours: int
    minutes: int
    tooltip: str = ""
