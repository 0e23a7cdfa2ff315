# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from babylog.model.duration import Clock, DurationClassification, RecommendedRange
from babylog.model.sleep import Sleep, SleepType
from babylog.service.preset import presets_for, suggested_end_times
from babylog.time import local_date_at_clock

RECOMMENDED_DURATIONS: dict[str, RecommendedRange] = {
    "nap": RecommendedRange(20, 180),  # 20min to 3h
    "night": RecommendedRange(420, 780),  # 7h to 13h
}


class SleepDurationPreview(TypedDict):
    minutes: int
    text: str
    classification: DurationClassification
    suggested_end_times: list[Clock]


def elapsed_minutes(date: pendulum.Date, start_clock: Clock, end_clock: Clock) -> int:
    """
    Minutes between two wall-clock times on the same date.

    An end clock earlier than the start clock is taken to be on the following
    day, so 22:00 -> 06:00 is 480 minutes rather than an error.
    """
    # UTC keeps DST transitions out of wall-clock differences
    start = pendulum.datetime(
        date.year, date.month, date.day, start_clock.hour, start_clock.minute
    )
    end = pendulum.datetime(
        date.year, date.month, date.day, end_clock.hour, end_clock.minute
    )
    if end < start:
        end = end.add(days=1)
    return int((end - start).total_seconds()) // 60


def classify(minutes: int, sleep_type: SleepType) -> DurationClassification:
    """Advisory classification against the sleep type's recommended range."""
    recommended = RECOMMENDED_DURATIONS[sleep_type]
    if minutes < recommended.min_minutes:
        return DurationClassification.BELOW_RECOMMENDED
    if minutes > recommended.max_minutes:
        return DurationClassification.ABOVE_RECOMMENDED
    return DurationClassification.WITHIN_RECOMMENDED


def format_duration(minutes: int) -> str:
    return f"{minutes // 60}h {minutes % 60}m"


def format_feeding_duration(minutes: int) -> str:
    return f"{minutes} minutes"


def resolve_sleep_window(
    date: pendulum.Date, start_clock: Clock, end_clock: Clock
) -> tuple[pendulum.DateTime, pendulum.DateTime]:
    """Local date and clocks to UTC start/end, rolling the end over to the next day."""
    start = local_date_at_clock(date, start_clock)
    end = local_date_at_clock(date, end_clock)
    if end < start:
        end = local_date_at_clock(date.add(days=1), end_clock)
    return start, end


def sleep_record_minutes(sleep: Sleep) -> Optional[int]:
    if sleep["end_time"] is None:
        return None
    return max(0, int((sleep["end_time"] - sleep["start_time"]).total_seconds()) // 60)


def duration_preview(
    sleep_type: SleepType,
    start_clock: Clock,
    end_clock: Clock,
    date: Optional[pendulum.Date] = None,
) -> SleepDurationPreview:
    """Everything a sleep form shows while the user is still composing it."""
    if date is None:
        date = pendulum.today("local").date()
    minutes = elapsed_minutes(date, start_clock, end_clock)
    return {
        "minutes": minutes,
        "text": format_duration(minutes),
        "classification": classify(minutes, sleep_type),
        "suggested_end_times": suggested_end_times(
            start_clock, presets_for(sleep_type)
        ),
    }


def time_since_last_sleep(
    sleeps: list[Sleep],
    sleep_type: SleepType = "nap",
    now: Optional[pendulum.DateTime] = None,
) -> Optional[str]:
    """
    Humanized time since the most recent closed sleep of a type, e.g. "2 hours ago".

    Returns None when no such sleep has been logged.
    """
    closed = [
        sleep
        for sleep in sleeps
        if sleep["sleep_type"] == sleep_type and sleep["end_time"] is not None
    ]
    if len(closed) == 0:
        return None

    last_end = max(sleep["end_time"] for sleep in closed)  # type: ignore[type-var]
    if now is None:
        now = pendulum.now("UTC")
    return f"{now.diff_for_humans(last_end, absolute=True)} ago"
