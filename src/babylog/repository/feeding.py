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
from babylog.model.feeding import Feeding, FeedingType
from babylog.model.record_id import RecordId


class FeedingRepository:
    def __init__(self) -> None:
        self._feedings: Optional[list[Feeding]] = None
        self.is_dirty = False
        self._dirty_ids: set[RecordId] = set()
        self._deleted_ids: set[RecordId] = set()
        # Highest id handed out or deleted, so ids are never reused in a session
        self._highest_id: RecordId = 0

    @property
    def feedings(self) -> list[Feeding]:
        if self._feedings is None:
            self.__load_data()
        if self._feedings is None:
            raise ValueError()
        return self._feedings

    def __load_data(self) -> None:
        # Only assigned once every file has been read, so a failed load is retried
        feedings: list[Feeding] = []
        if configuration.DATA_FEEDINGS_DIR.is_dir():
            for file_path in configuration.DATA_FEEDINGS_DIR.iterdir():
                if file_path.suffix != ".yaml":
                    continue
                raw_feeding = load(file_path.read_text(), Loader=Loader)
                if raw_feeding is not None:
                    feedings.append(
                        self.__convert_feeding_for_deserialization(raw_feeding)
                    )
        self._feedings = feedings

    def __save_data(self) -> None:
        configuration.DATA_FEEDINGS_DIR.mkdir(parents=True, exist_ok=True)

        # Write dirty records
        for feeding in self.feedings:
            if feeding["id"] in self._dirty_ids:
                serializable_feeding = self.__convert_feeding_for_serialization(
                    deepcopy(feeding)
                )
                file_path = configuration.DATA_FEEDINGS_DIR / f"{feeding['id']}.yaml"
                file_path.write_text(dump(serializable_feeding, Dumper=Dumper))

        # Remove deleted record files
        for record_id in self._deleted_ids:
            file_path = configuration.DATA_FEEDINGS_DIR / f"{record_id}.yaml"
            if file_path.exists():
                file_path.unlink()

        self._dirty_ids.clear()
        self._deleted_ids.clear()

    def flush(self) -> bool:
        if self._feedings is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def __convert_feeding_for_serialization(self, feeding: Feeding) -> dict[str, Any]:
        serializable_feeding = cast(dict[str, Any], feeding)
        serializable_feeding["timestamp"] = time.datetime_to_iso_str(
            serializable_feeding["timestamp"]
        )
        return serializable_feeding

    def __convert_feeding_for_deserialization(
        self, feeding: dict[str, Any]
    ) -> Feeding:
        deserializable_feeding = feeding
        deserializable_feeding["timestamp"] = time.datetime_from_str(
            deserializable_feeding["timestamp"]
        )
        return cast(Feeding, deserializable_feeding)

    def __next_id(self) -> RecordId:
        existing_ids = [cast(int, feeding["id"]) for feeding in self.feedings]
        return max(existing_ids + [self._highest_id], default=0) + 1

    def save_new_feeding(self, feeding: Feeding) -> RecordId:
        self.is_dirty = True

        feeding["id"] = self.__next_id()
        self._highest_id = cast(int, feeding["id"])
        self.feedings.append(feeding)
        self._dirty_ids.add(feeding["id"])

        return feeding["id"]

    def modify_feeding(
        self,
        id: RecordId,
        timestamp: Optional[pendulum.DateTime],
        feeding_type: Optional[FeedingType],
        duration: Optional[int],
        amount: Optional[float],
        notes: Optional[str],
        remove_amount: bool,
        remove_notes: bool,
    ) -> None:
        self.is_dirty = True
        self._dirty_ids.add(id)

        feeding = [feeding for feeding in self.feedings if feeding["id"] == id][0]
        if timestamp is not None:
            feeding["timestamp"] = timestamp
        if feeding_type is not None:
            feeding["feeding_type"] = feeding_type
        if duration is not None:
            feeding["duration"] = duration
        if amount is not None:
            feeding["amount"] = amount
        if notes is not None:
            feeding["notes"] = notes

        if remove_amount:
            feeding["amount"] = None
        if remove_notes:
            feeding["notes"] = None

    def delete_feeding(self, id: RecordId) -> None:
        self.is_dirty = True
        self._feedings = [feeding for feeding in self.feedings if feeding["id"] != id]
        self._dirty_ids.discard(id)
        self._deleted_ids.add(id)
        self._highest_id = max(self._highest_id, id)

    def has_feeding(self, id: RecordId) -> bool:
        return any(feeding["id"] == id for feeding in self.feedings)

    def get_all_feedings(self) -> list[Feeding]:
        return deepcopy(self.feedings)

    def get_feeding(self, id: RecordId) -> Feeding:
        return deepcopy(
            [feeding for feeding in self.feedings if feeding["id"] == id][0]
        )


FEEDING_REPO = FeedingRepository()
