# SPDX-License-Identifier: MIT

from habitual.model.entity_type import EntityType
from habitual.model.habit import Habit
from habitual.time import now_utc, today


def get_habit_template() -> Habit:
    now = now_utc()
    return {
        "id": None,
        "entity_type": EntityType.HABIT,
        "name": "",
        "description": None,
        "habit_type": "boolean",
        "target_value": None,
        "unit": None,
        "color": None,
        "icon": None,
        "start_date": today(),
        "end_date": None,
        "schedule": {"schedule_type": "daily"},
        "reminders": [],
        "created": now,
        "updated": now,
        "archived": None,
    }
