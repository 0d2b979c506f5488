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
from habitual.model.entry import HabitEntry
from habitual.template.entry import get_entry_template


class EntryRepository:
    """
    One entry per (habit, date).

    Writing a null value deletes the entry instead of storing an empty one.
    """

    def __init__(self) -> None:
        self._entries: Optional[list[HabitEntry]] = None
        self.is_dirty = False
        self._dirty_ids: set[str] = set()
        self._deleted_ids: set[str] = set()

    @property
    def entries(self) -> list[HabitEntry]:
        if self._entries is None:
            self.__load_data()
        if self._entries is None:
            raise ValueError()
        return self._entries

    def __load_data(self) -> None:
        self._entries = []
        for file_path in configuration.DATA_ENTRIES_DIR.iterdir():
            if file_path.suffix != ".yaml" or file_path.name == ".gitkeep":
                continue
            raw_entry = load(file_path.read_text(), Loader=Loader)
            if raw_entry is not None:
                self._entries.append(
                    self.__convert_entry_for_deserialization(raw_entry)
                )

    def __save_data(self) -> None:
        # Write dirty entities
        for entry in self.entries:
            if entry["id"] in self._dirty_ids:
                serializable_entry = self.__convert_entry_for_serialization(
                    deepcopy(entry)
                )
                file_path = configuration.DATA_ENTRIES_DIR / f"{entry['id']}.yaml"
                file_path.write_text(dump(serializable_entry, Dumper=Dumper))

        # Remove hard-deleted entity files
        for entity_id in self._deleted_ids:
            file_path = configuration.DATA_ENTRIES_DIR / f"{entity_id}.yaml"
            if file_path.exists():
                file_path.unlink()

        self._dirty_ids.clear()
        self._deleted_ids.clear()

    def flush(self) -> bool:
        if self._entries is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def __convert_entry_for_serialization(self, entry: HabitEntry) -> dict[str, Any]:
        serializable_entry = cast(dict[str, Any], entry)
        serializable_entry["date"] = time.date_to_str(serializable_entry["date"])
        serializable_entry["created"] = time.datetime_to_iso_str(
            serializable_entry["created"]
        )
        serializable_entry["updated"] = time.datetime_to_iso_str(
            serializable_entry["updated"]
        )
        return serializable_entry

    def __convert_entry_for_deserialization(
        self, entry: dict[str, Any]
    ) -> HabitEntry:
        deserializable_entry = entry
        deserializable_entry["date"] = time.date_from_value(
            deserializable_entry["date"]
        )
        deserializable_entry["created"] = time.datetime_from_str(
            deserializable_entry["created"]
        )
        deserializable_entry["updated"] = time.datetime_from_str(
            deserializable_entry["updated"]
        )
        return cast(HabitEntry, deserializable_entry)

    def __find(self, habit_id: EntityId, date: datetime.date) -> Optional[HabitEntry]:
        day = time.to_date(date)
        for entry in self.entries:
            if entry["habit_id"] == habit_id and entry["date"] == day:
                return entry
        return None

    def __delete(self, entry: HabitEntry) -> None:
        self.is_dirty = True
        self.entries.remove(entry)
        if entry["id"] is not None:
            self._dirty_ids.discard(entry["id"])
            self._deleted_ids.add(entry["id"])

    def get_entry_for(
        self, habit_id: EntityId, date: datetime.date
    ) -> Optional[HabitEntry]:
        entry = self.__find(habit_id, date)
        return deepcopy(entry) if entry is not None else None

    def set_entry_value(
        self,
        habit_id: EntityId,
        date: datetime.date,
        value: Optional[float],
        note: Optional[str] = None,
    ) -> Optional[EntityId]:
        """
        Upsert the value for a habit on a date.

        A value of None removes the entry and returns None.
        """
        existing = self.__find(habit_id, date)

        if value is None:
            if existing is not None:
                self.__delete(existing)
            return None

        self.is_dirty = True

        if existing is not None:
            existing["value"] = value
            if note is not None:
                existing["note"] = note
            existing["updated"] = time.now_utc()
            if existing["id"] is not None:
                self._dirty_ids.add(existing["id"])
            return existing["id"]

        entry = get_entry_template()
        entry["id"] = generate_entity_id()
        entry["habit_id"] = habit_id
        entry["date"] = time.to_date(date)
        entry["value"] = value
        entry["note"] = note

        self.entries.append(entry)
        self._dirty_ids.add(entry["id"])

        return entry["id"]

    def clear_entry(self, habit_id: EntityId, date: datetime.date) -> bool:
        """Remove the entry for a habit on a date. Returns whether one existed."""
        existing = self.__find(habit_id, date)
        if existing is None:
            return False
        self.__delete(existing)
        return True

    def get_entries_for_habit(self, habit_id: EntityId) -> list[HabitEntry]:
        return deepcopy(
            sorted(
                [entry for entry in self.entries if entry["habit_id"] == habit_id],
                key=lambda entry: entry["date"],
            )
        )

    def get_entries_on(self, date: datetime.date) -> list[HabitEntry]:
        day = time.to_date(date)
        return deepcopy([entry for entry in self.entries if entry["date"] == day])

    def delete_entries_for_habit(self, habit_id: EntityId) -> int:
        doomed = [entry for entry in self.entries if entry["habit_id"] == habit_id]
        for entry in doomed:
            self.__delete(entry)
        return len(doomed)


ENTRY_REPO = EntryRepository()
