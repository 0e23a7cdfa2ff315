# SPDX-License-Identifier: MIT

import logging
from typing import Optional

from babylog.model.event import ListRefreshed, Notice, NoticeLevel
from babylog.model.record import Record
from babylog.model.record_id import RecordId
from babylog.model.table import TableName
from babylog.service.notifier import Notifier
from babylog.service.storage import RecordStorage, StorageError

logger = logging.getLogger(__name__)


class ListCache:
    """
    Record lists keyed by table name.

    Lists are only ever replaced wholesale by a fresh `list()` from storage;
    nothing outside this class patches them.
    """

    def __init__(self, notifier: Optional[Notifier] = None) -> None:
        self._notifier = notifier
        self._storages: dict[TableName, RecordStorage] = {}
        self._lists: dict[TableName, list[Record]] = {}

    def register(self, storage: RecordStorage) -> None:
        self._storages[storage.table] = storage

    async def get(self, table: TableName) -> list[Record]:
        if table not in self._lists:
            self._lists[table] = await self._storages[table].list()
        return self._lists[table]

    def peek(self, table: TableName) -> Optional[list[Record]]:
        return self._lists.get(table)

    def find(self, table: TableName, record_id: RecordId) -> Optional[Record]:
        for record in self._lists.get(table, []):
            if record["id"] == record_id:
                return record
        return None

    async def invalidate(self, table: TableName) -> None:
        """
        Re-fetch the list for `table` and replace the cached one with it.

        The old list stays visible until the new one arrives, and is kept if
        the fetch fails.
        """
        logger.debug("invalidated %s list", table)
        try:
            records = await self._storages[table].list()
        except StorageError as e:
            logger.warning("failed to refresh %s: %s", table, e)
            if self._notifier is not None:
                self._notifier.emit(
                    Notice(NoticeLevel.ERROR, f"Failed to load {table}", "Error")
                )
            return

        self._lists[table] = records
        if self._notifier is not None:
            self._notifier.emit(ListRefreshed(table, len(records)))
