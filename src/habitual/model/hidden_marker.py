# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from habitual.model.entity_id import EntityId


class HiddenMarker(TypedDict):
    """Suppresses one habit on one date, whatever its schedule says."""

    id: Optional[EntityId]
    entity_type: str  # "hidden_marker"
    habit_id: EntityId
    date: pendulum.Date
    created: pendulum.DateTime
