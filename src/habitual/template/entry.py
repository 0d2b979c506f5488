# SPDX-License-Identifier: MIT

from habitual.model.entity_id import UNSET_ENTITY_ID
from habitual.model.entity_type import EntityType
from habitual.model.entry import HabitEntry
from habitual.time import now_utc, today


def get_entry_template() -> HabitEntry:
    now = now_utc()
    return {
        "id": None,
        "entity_type": EntityType.ENTRY,
        "habit_id": UNSET_ENTITY_ID,  # Must be set
        "date": today(),
        "value": None,
        "note": None,
        "created": now,
        "updated": now,
    }
