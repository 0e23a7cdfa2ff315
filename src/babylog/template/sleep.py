# SPDX-License-Identifier: MIT

from babylog.model.sleep import Sleep
from babylog.time import now_utc


def get_sleep_template() -> Sleep:
    now = now_utc()
    return {
        "id": None,
        "start_time": now,
        "end_time": now.add(hours=8),
        "sleep_type": "night",
        "notes": None,
    }
