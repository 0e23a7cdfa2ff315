# SPDX-License-Identifier: MIT

from typing import Any

from babylog.model.feeding import Feeding
from babylog.model.sleep import Sleep

type Record = Feeding | Sleep

# Partial field updates sent to storage, keyed by field name
type FieldChanges = dict[str, Any]
