# SPDX-License-Identifier: MIT

from typing import Literal

TableName = Literal["feedings", "sleep"]


class Table:
    FEEDINGS: TableName = "feedings"
    SLEEP: TableName = "sleep"
