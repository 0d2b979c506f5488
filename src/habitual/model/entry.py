# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from habitual.model.entity_id import EntityId


class HabitEntry(TypedDict):
    id: Optional[EntityId]
    entity_type: str  # "entry"
    habit_id: EntityId  # Reference to parent habit
    date: pendulum.Date  # Calendar day the value belongs to
    value: Optional[float]
    note: Optional[str]

    # Standard fields
    created: pendulum.DateTime
    updated: pendulum.DateTime
