# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Any, Optional, cast

import pendulum
from yaml import dump, load

try:
    from yaml import CDumper as Dumper  # noqa: F401
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from habitual import configuration, time
from habitual.model.entity_id import EntityId, generate_entity_id
from habitual.model.habit import Habit, HabitType, Reminder
from habitual.model.schedule import ScheduleDefinition


class HabitNotFoundError(LookupError):
    """Raised when no habit exists for an id."""

    pass


class HabitRepository:
    def __init__(self) -> None:
        self._habits: Optional[list[Habit]] = None
        self.is_dirty = False
        self._dirty_ids: set[str] = set()
        self._deleted_ids: set[str] = set()

    @property
    def habits(self) -> list[Habit]:
        if self._habits is None:
            self.__load_data()
        if self._habits is None:
            raise ValueError()
        return self._habits

    def __load_data(self) -> None:
        self._habits = []
        for file_path in configuration.DATA_HABITS_DIR.iterdir():
            if file_path.suffix != ".yaml" or file_path.name == ".gitkeep":
                continue
            raw_habit = load(file_path.read_text(), Loader=Loader)
            if raw_habit is not None:
                self._habits.append(self.__convert_habit_for_deserialization(raw_habit))

    def __save_data(self) -> None:
        # Write dirty entities
        for habit in self.habits:
            if habit["id"] in self._dirty_ids:
                serializable_habit = self.__convert_habit_for_serialization(
                    deepcopy(habit)
                )
                file_path = configuration.DATA_HABITS_DIR / f"{habit['id']}.yaml"
                file_path.write_text(dump(serializable_habit, Dumper=Dumper))

        # Remove hard-deleted entity files
        for entity_id in self._deleted_ids:
            file_path = configuration.DATA_HABITS_DIR / f"{entity_id}.yaml"
            if file_path.exists():
                file_path.unlink()

        self._dirty_ids.clear()
        self._deleted_ids.clear()

    def flush(self) -> bool:
        if self._habits is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def __convert_habit_for_serialization(self, habit: Habit) -> dict[str, Any]:
        serializable_habit = cast(dict[str, Any], habit)
        serializable_habit["start_date"] = time.date_to_str(
            serializable_habit["start_date"]
        )
        serializable_habit["end_date"] = time.date_to_str_optional(
            serializable_habit["end_date"]
        )
        schedule = serializable_habit["schedule"]
        if schedule.get("start_date") is not None:
            schedule["start_date"] = time.date_to_str(schedule["start_date"])
        serializable_habit["created"] = time.datetime_to_iso_str(
            serializable_habit["created"]
        )
        serializable_habit["updated"] = time.datetime_to_iso_str(
            serializable_habit["updated"]
        )
        serializable_habit["archived"] = time.datetime_to_iso_str_optional(
            serializable_habit["archived"]
        )
        return serializable_habit

    def __convert_habit_for_deserialization(self, habit: dict[str, Any]) -> Habit:
        deserializable_habit = habit
        deserializable_habit["start_date"] = time.date_from_value(
            deserializable_habit["start_date"]
        )
        deserializable_habit["end_date"] = time.date_from_value_optional(
            deserializable_habit.get("end_date")
        )
        schedule = deserializable_habit.get("schedule") or {}
        if schedule.get("start_date") is not None:
            schedule["start_date"] = time.date_from_value(schedule["start_date"])
        deserializable_habit["schedule"] = schedule
        deserializable_habit["reminders"] = deserializable_habit.get("reminders") or []
        deserializable_habit["created"] = time.datetime_from_str(
            deserializable_habit["created"]
        )
        deserializable_habit["updated"] = time.datetime_from_str(
            deserializable_habit["updated"]
        )
        deserializable_habit["archived"] = time.datetime_from_str_optional(
            deserializable_habit.get("archived")
        )
        return cast(Habit, deserializable_habit)

    def __find(self, id: EntityId) -> Habit:
        for habit in self.habits:
            if habit["id"] == id:
                return habit
        raise HabitNotFoundError(f"No habit with id {id}")

    def save_new_habit(self, habit: Habit) -> EntityId:
        self.is_dirty = True

        habit["id"] = generate_entity_id()

        self.habits.append(habit)
        self._dirty_ids.add(habit["id"])

        return habit["id"]

    def modify_habit(
        self,
        id: EntityId,
        name: Optional[str] = None,
        description: Optional[str] = None,
        habit_type: Optional[HabitType] = None,
        target_value: Optional[float] = None,
        unit: Optional[str] = None,
        color: Optional[str] = None,
        icon: Optional[str] = None,
        start_date: Optional[pendulum.Date] = None,
        end_date: Optional[pendulum.Date] = None,
        schedule: Optional[ScheduleDefinition] = None,
        reminders: Optional[list[Reminder]] = None,
        archived: Optional[pendulum.DateTime] = None,
        remove_description: bool = False,
        remove_target_value: bool = False,
        remove_unit: bool = False,
        remove_color: bool = False,
        remove_icon: bool = False,
        remove_end_date: bool = False,
        remove_archived: bool = False,
    ) -> None:
        habit = self.__find(id)

        self.is_dirty = True
        self._dirty_ids.add(id)

        # Set updated timestamp to current moment
        habit["updated"] = time.now_utc()
        if name is not None:
            habit["name"] = name
        if description is not None:
            habit["description"] = description
        if habit_type is not None:
            habit["habit_type"] = habit_type
        if target_value is not None:
            habit["target_value"] = target_value
        if unit is not None:
            habit["unit"] = unit
        if color is not None:
            habit["color"] = color
        if icon is not None:
            habit["icon"] = icon
        if start_date is not None:
            habit["start_date"] = start_date
        if end_date is not None:
            habit["end_date"] = end_date
        if schedule is not None:
            habit["schedule"] = schedule
        if reminders is not None:
            habit["reminders"] = reminders
        if archived is not None:
            habit["archived"] = archived

        if remove_description:
            habit["description"] = None
        if remove_target_value:
            habit["target_value"] = None
        if remove_unit:
            habit["unit"] = None
        if remove_color:
            habit["color"] = None
        if remove_icon:
            habit["icon"] = None
        if remove_end_date:
            habit["end_date"] = None
        if remove_archived:
            habit["archived"] = None

    def delete_habit(self, id: EntityId) -> None:
        habit = self.__find(id)

        self.is_dirty = True
        self.habits.remove(habit)
        self._dirty_ids.discard(id)
        self._deleted_ids.add(id)

    def get_all_habits(self, include_archived: bool = False) -> list[Habit]:
        return deepcopy(
            [
                habit
                for habit in self.habits
                if include_archived or habit["archived"] is None
            ]
        )

    def get_habit(self, id: EntityId) -> Habit:
        return deepcopy(self.__find(id))

    def get_schedule(self, id: EntityId) -> ScheduleDefinition:
        return deepcopy(self.__find(id)["schedule"])

    def habit_exists(self, id: EntityId) -> bool:
        return any(habit["id"] == id for habit in self.habits)


HABIT_REPO = HabitRepository()
