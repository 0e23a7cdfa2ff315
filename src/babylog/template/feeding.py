# SPDX-License-Identifier: MIT

from babylog.model.feeding import DEFAULT_FEEDING_MINUTES, Feeding
from babylog.time import now_utc


def get_feeding_template() -> Feeding:
    return {
        "id": None,
        "timestamp": now_utc(),
        "feeding_type": "breast",
        "duration": DEFAULT_FEEDING_MINUTES,
        "amount": None,
        "notes": None,
    }
