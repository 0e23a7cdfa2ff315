# SPDX-License-Identifier: MIT

from babylog.edit.table import EditableTable, settings_for
from babylog.model.table import Table, TableName
from babylog.repository.configuration import CONFIGURATION_REPO
from babylog.service.feeding import FeedingStorage
from babylog.service.list_cache import ListCache
from babylog.service.notifier import Notifier
from babylog.service.sleep import SleepStorage
from babylog.service.storage import RecordStorage
from babylog.view.notice import print_notices


def open_table(table: TableName) -> EditableTable:
    """An editable table wired to local storage, printing notices to the terminal."""
    config = CONFIGURATION_REPO.get_config()

    notifier = Notifier()
    notifier.subscribe(print_notices)

    storage: RecordStorage
    if table == Table.FEEDINGS:
        storage = FeedingStorage()
    else:
        storage = SleepStorage()

    return EditableTable(
        table, storage, ListCache(notifier), notifier, settings_for(table, config)
    )
