# SPDX-License-Identifier: MIT

import datetime
from copy import deepcopy
from typing import Any, Optional, cast

from yaml import dump, load

try:
    from yaml import CDumper as Dumper  # noqa: F401
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from habitual import configuration, time
from habitual.model.entity_id import EntityId, generate_entity_id
from habitual.model.hidden_marker import HiddenMarker
from habitual.template.hidden_marker import get_hidden_marker_template


class HiddenMarkerRepository:
    def __init__(self) -> None:
        self._markers: Optional[list[HiddenMarker]] = None
        self.is_dirty = False
        self._dirty_ids: set[str] = set()
        self._deleted_ids: set[str] = set()

    @property
    def markers(self) -> list[HiddenMarker]:
        if self._markers is None:
            self.__load_data()
        if self._markers is None:
            raise ValueError()
        return self._markers

    def __load_data(self) -> None:
        self._markers = []
        for file_path in configuration.DATA_HIDDEN_DIR.iterdir():
            if file_path.suffix != ".yaml" or file_path.name == ".gitkeep":
                continue
            raw_marker = load(file_path.read_text(), Loader=Loader)
            if raw_marker is not None:
                self._markers.append(
                    self.__convert_marker_for_deserialization(raw_marker)
                )

    def __save_data(self) -> None:
        # Write dirty entities
        for marker in self.markers:
            if marker["id"] in self._dirty_ids:
                serializable_marker = self.__convert_marker_for_serialization(
                    deepcopy(marker)
                )
                file_path = configuration.DATA_HIDDEN_DIR / f"{marker['id']}.yaml"
                file_path.write_text(dump(serializable_marker, Dumper=Dumper))

        # Remove hard-deleted entity files
        for entity_id in self._deleted_ids:
            file_path = configuration.DATA_HIDDEN_DIR / f"{entity_id}.yaml"
            if file_path.exists():
                file_path.unlink()

        self._dirty_ids.clear()
        self._deleted_ids.clear()

    def flush(self) -> bool:
        if self._markers is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def __convert_marker_for_serialization(
        self, marker: HiddenMarker
    ) -> dict[str, Any]:
        serializable_marker = cast(dict[str, Any], marker)
        serializable_marker["date"] = time.date_to_str(serializable_marker["date"])
        serializable_marker["created"] = time.datetime_to_iso_str(
            serializable_marker["created"]
        )
        return serializable_marker

    def __convert_marker_for_deserialization(
        self, marker: dict[str, Any]
    ) -> HiddenMarker:
        deserializable_marker = marker
        deserializable_marker["date"] = time.date_from_value(
            deserializable_marker["date"]
        )
        deserializable_marker["created"] = time.datetime_from_str(
            deserializable_marker["created"]
        )
        return cast(HiddenMarker, deserializable_marker)

    def __delete(self, marker: HiddenMarker) -> None:
        self.is_dirty = True
        self.markers.remove(marker)
        if marker["id"] is not None:
            self._dirty_ids.discard(marker["id"])
            self._deleted_ids.add(marker["id"])

    def set_hidden_marker(self, habit_id: EntityId, date: datetime.date) -> bool:
        """Create the marker if absent. Returns whether one was created."""
        day = time.to_date(date)
        if any(
            marker["habit_id"] == habit_id and marker["date"] == day
            for marker in self.markers
        ):
            return False

        self.is_dirty = True

        marker = get_hidden_marker_template()
        marker["id"] = generate_entity_id()
        marker["habit_id"] = habit_id
        marker["date"] = day

        self.markers.append(marker)
        self._dirty_ids.add(marker["id"])
        return True

    def clear_hidden_marker(self, habit_id: EntityId, date: datetime.date) -> bool:
        """Remove the marker if present. Returns whether one was removed."""
        day = time.to_date(date)
        for marker in self.markers:
            if marker["habit_id"] == habit_id and marker["date"] == day:
                self.__delete(marker)
                return True
        return False

    def clear_all_hidden_markers(self, date: datetime.date) -> int:
        day = time.to_date(date)
        doomed = [marker for marker in self.markers if marker["date"] == day]
        for marker in doomed:
            self.__delete(marker)
        return len(doomed)

    def get_hidden_habit_ids(self, date: datetime.date) -> set[EntityId]:
        day = time.to_date(date)
        return {marker["habit_id"] for marker in self.markers if marker["date"] == day}

    def is_hidden(self, habit_id: EntityId, date: datetime.date) -> bool:
        return habit_id in self.get_hidden_habit_ids(date)

    def delete_markers_for_habit(self, habit_id: EntityId) -> int:
        doomed = [marker for marker in self.markers if marker["habit_id"] == habit_id]
        for marker in doomed:
            self.__delete(marker)
        return len(doomed)


HIDDEN_MARKER_REPO = HiddenMarkerRepository()
