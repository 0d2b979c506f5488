# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from habitual.model.entity_id import EntityId
from habitual.model.habit import HabitType


class Preset(TypedDict):
    id: Optional[EntityId]
    entity_type: str  # "preset"
    name: str
    description: Optional[str]
    habit_type: HabitType
    default_target: Optional[float]
    unit: Optional[str]
    default_dow_mask: int
    default_color: Optional[str]
    default_icon: Optional[str]
    category: str  # "custom" for user presets
    created: pendulum.DateTime
