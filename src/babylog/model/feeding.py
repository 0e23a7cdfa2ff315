# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypedDict

import pendulum

from babylog.model.record_id import RecordId

FeedingType = Literal["breast", "bottle", "solids"]

FEEDING_TYPES: list[FeedingType] = ["breast", "bottle", "solids"]

FEEDING_TYPE_LABELS: dict[str, str] = {
    "breast": "Breastfeeding",
    "bottle": "Bottle",
    "solids": "Solids",
}

MIN_FEEDING_MINUTES = 1
MAX_FEEDING_MINUTES = 120
DEFAULT_FEEDING_MINUTES = 20


class Feeding(TypedDict):
    id: Optional[RecordId]
    timestamp: pendulum.DateTime
    feeding_type: FeedingType
    duration: int  # minutes
    amount: Optional[float]  # ounces, bottle only
    notes: Optional[str]
