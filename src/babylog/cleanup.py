# SPDX-License-Identifier: MIT

import atexit

from babylog.repository.configuration import CONFIGURATION_REPO
from babylog.repository.feeding import FEEDING_REPO
from babylog.repository.sleep import SLEEP_REPO


def flush() -> None:
    CONFIGURATION_REPO.flush()

    # Storage flushes after every write; this catches anything left dirty
    FEEDING_REPO.flush()
    SLEEP_REPO.flush()


def register_cleanup() -> None:
    atexit.register(flush)
