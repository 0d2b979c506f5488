# SPDX-License-Identifier: MIT

from habitual.model.entity_type import EntityType
from habitual.model.preset import Preset
from habitual.service.day_of_week import EVERY_DAY
from habitual.time import now_utc


def get_preset_template() -> Preset:
    return {
        "id": None,
        "entity_type": EntityType.PRESET,
        "name": "",
        "description": None,
        "habit_type": "boolean",
        "default_target": None,
        "unit": None,
        "default_dow_mask": EVERY_DAY,
        "default_color": None,
        "default_icon": None,
        "category": "custom",
        "created": now_utc(),
    }
