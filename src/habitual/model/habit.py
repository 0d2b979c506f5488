# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypedDict

import pendulum

from habitual.model.entity_id import EntityId
from habitual.model.schedule import ScheduleDefinition

HabitType = Literal["boolean", "count", "quantity", "duration"]
HABIT_TYPES: tuple[HabitType, ...] = ("boolean", "count", "quantity", "duration")


class Reminder(TypedDict):
    minutes_after_midnight: int  # 0..1439
    dow_mask: int
    enabled: bool


class Habit(TypedDict):
    id: Optional[EntityId]
    entity_type: str  # "habit"
    name: str
    description: Optional[str]
    habit_type: HabitType
    target_value: Optional[float]  # Required for count, quantity and duration
    unit: Optional[str]  # e.g., "glasses", "minutes"
    color: Optional[str]
    icon: Optional[str]
    start_date: pendulum.Date  # Inclusive
    end_date: Optional[pendulum.Date]  # Inclusive
    schedule: ScheduleDefinition
    reminders: list[Reminder]

    # Standard fields
    created: pendulum.DateTime
    updated: pendulum.DateTime
    archived: Optional[pendulum.DateTime]  # Archived timestamp (not deleted)
