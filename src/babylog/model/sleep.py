# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypedDict

import pendulum

from babylog.model.record_id import RecordId

SleepType = Literal["nap", "night"]

SLEEP_TYPES: list[SleepType] = ["nap", "night"]

SLEEP_TYPE_LABELS: dict[str, str] = {
    "nap": "Nap",
    "night": "Night Sleep",
}


class Sleep(TypedDict):
    id: Optional[RecordId]
    start_time: pendulum.DateTime
    end_time: Optional[pendulum.DateTime]  # open until the sleep is closed
    sleep_type: SleepType
    notes: Optional[str]
