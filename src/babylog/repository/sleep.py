# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Any, Optional, cast

import pendulum
from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from babylog import configuration, time
from babylog.model.record_id import RecordId
from babylog.model.sleep import Sleep, SleepType


class SleepRepository:
    def __init__(self) -> None:
        self._sleeps: Optional[list[Sleep]] = None
        self.is_dirty = False
        self._dirty_ids: set[RecordId] = set()
        self._deleted_ids: set[RecordId] = set()
        # Highest id handed out or deleted, so ids are never reused in a session
        self._highest_id: RecordId = 0

    @property
    def sleeps(self) -> list[Sleep]:
        if self._sleeps is None:
            self.__load_data()
        if self._sleeps is None:
            raise ValueError()
        return self._sleeps

    def __load_data(self) -> None:
        # Only assigned once every file has been read, so a failed load is retried
        sleeps: list[Sleep] = []
        if configuration.DATA_SLEEP_DIR.is_dir():
            for file_path in configuration.DATA_SLEEP_DIR.iterdir():
                if file_path.suffix != ".yaml":
                    continue
                raw_sleep = load(file_path.read_text(), Loader=Loader)
                if raw_sleep is not None:
                    sleeps.append(self.__convert_sleep_for_deserialization(raw_sleep))
        self._sleeps = sleeps

    def __save_data(self) -> None:
        configuration.DATA_SLEEP_DIR.mkdir(parents=True, exist_ok=True)

        for sleep in self.sleeps:
            if sleep["id"] in self._dirty_ids:
                serializable_sleep = self.__convert_sleep_for_serialization(
                    deepcopy(sleep)
                )
                file_path = configuration.DATA_SLEEP_DIR / f"{sleep['id']}.yaml"
                file_path.write_text(dump(serializable_sleep, Dumper=Dumper))

        for record_id in self._deleted_ids:
            file_path = configuration.DATA_SLEEP_DIR / f"{record_id}.yaml"
            if file_path.exists():
                file_path.unlink()

        self._dirty_ids.clear()
        self._deleted_ids.clear()

    def flush(self) -> bool:
        if self._sleeps is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def __convert_sleep_for_serialization(self, sleep: Sleep) -> dict[str, Any]:
        serializable_sleep = cast(dict[str, Any], sleep)
        serializable_sleep["start_time"] = time.datetime_to_iso_str(
            serializable_sleep["start_time"]
        )
        serializable_sleep["end_time"] = time.datetime_to_iso_str_optional(
            serializable_sleep["end_time"]
        )
        return serializable_sleep

    def __convert_sleep_for_deserialization(self, sleep: dict[str, Any]) -> Sleep:
        deserializable_sleep = sleep
        deserializable_sleep["start_time"] = time.datetime_from_str(
            deserializable_sleep["start_time"]
        )
        deserializable_sleep["end_time"] = time.datetime_from_str_optional(
            deserializable_sleep["end_time"]
        )
        return cast(Sleep, deserializable_sleep)

    def __next_id(self) -> RecordId:
        existing_ids = [cast(int, sleep["id"]) for sleep in self.sleeps]
        return max(existing_ids + [self._highest_id], default=0) + 1

    def save_new_sleep(self, sleep: Sleep) -> RecordId:
        self.is_dirty = True

        sleep["id"] = self.__next_id()
        self._highest_id = cast(int, sleep["id"])
        self.sleeps.append(sleep)
        self._dirty_ids.add(sleep["id"])

        return sleep["id"]

    def modify_sleep(
        self,
        id: RecordId,
        start_time: Optional[pendulum.DateTime],
        end_time: Optional[pendulum.DateTime],
        sleep_type: Optional[SleepType],
        notes: Optional[str],
        remove_end_time: bool,
        remove_notes: bool,
    ) -> None:
        self.is_dirty = True
        self._dirty_ids.add(id)

        sleep = [sleep for sleep in self.sleeps if sleep["id"] == id][0]
        if start_time is not None:
            sleep["start_time"] = start_time
        if end_time is not None:
            sleep["end_time"] = end_time
        if sleep_type is not None:
            sleep["sleep_type"] = sleep_type
        if notes is not None:
            sleep["notes"] = notes

        if remove_end_time:
            sleep["end_time"] = None
        if remove_notes:
            sleep["notes"] = None

    def delete_sleep(self, id: RecordId) -> None:
        self.is_dirty = True
        self._sleeps = [sleep for sleep in self.sleeps if sleep["id"] != id]
        self._dirty_ids.discard(id)
        self._deleted_ids.add(id)
        self._highest_id = max(self._highest_id, id)

    def has_sleep(self, id: RecordId) -> bool:
        return any(sleep["id"] == id for sleep in self.sleeps)

    def get_all_sleeps(self) -> list[Sleep]:
        return deepcopy(self.sleeps)

    def get_sleep(self, id: RecordId) -> Sleep:
        return deepcopy([sleep for sleep in self.sleeps if sleep["id"] == id][0])


SLEEP_REPO = SleepRepository()
