# SPDX-License-Identifier: MIT

from habitual.model.entity_id import UNSET_ENTITY_ID
from habitual.model.entity_type import EntityType
from habitual.model.hidden_marker import HiddenMarker
from habitual.time import now_utc, today


def get_hidden_marker_template() -> HiddenMarker:
    return {
        "id": None,
        "entity_type": EntityType.HIDDEN_MARKER,
        "habit_id": UNSET_ENTITY_ID,  # Must be set
        "date": today(),
        "created": now_utc(),
    }
