# SPDX-License-Identifier: MIT

import pendulum

from babylog.model.duration import Clock, Preset
from babylog.model.sleep import SleepType

NAP_PRESETS: list[Preset] = [
    Preset("30min", 0, 30, "Quick power nap"),
    Preset("1h", 1, 0, "Standard nap duration"),
    Preset("1.5h", 1, 30, "Full sleep cycle"),
    Preset("2h", 2, 0, "Long nap"),
]

NIGHT_PRESETS: list[Preset] = [
    Preset("8h", 8, 0, "Minimum recommended sleep"),
    Preset("10h", 10, 0, "Optimal sleep duration"),
    Preset("12h", 12, 0, "Maximum recommended sleep"),
]

_PRESETS: dict[str, list[Preset]] = {
    "nap": NAP_PRESETS,
    "night": NIGHT_PRESETS,
}


def presets_for(sleep_type: SleepType) -> list[Preset]:
    return list(_PRESETS[sleep_type])


def find_preset(sleep_type: SleepType, label: str) -> Preset:
    for preset in _PRESETS[sleep_type]:
        if preset.label == label:
            return preset
    valid_labels = ", ".join(preset.label for preset in _PRESETS[sleep_type])
    raise ValueError(
        f"Unknown {sleep_type} preset '{label}'. Valid options: {valid_labels}"
    )


def apply_preset(start_clock: Clock, offset_hours: int, offset_minutes: int) -> Clock:
    """
    Add an offset to a clock time, wrapping past midnight.

    Only the clock portion of the result is returned, so 23:00 + 2h is 01:00.
    """
    start = pendulum.datetime(2000, 1, 1, start_clock.hour, start_clock.minute)
    end = start.add(hours=offset_hours, minutes=offset_minutes)
    return Clock(end.hour, end.minute)


def suggested_end_times(start_clock: Clock, presets: list[Preset]) -> list[Clock]:
    """One end time per preset, in preset order."""
    return [
        apply_preset(start_clock, preset.hours, preset.minutes) for preset in presets
    ]
