# SPDX-License-Identifier: MIT

from typing import Literal, TypedDict

from habitual.model.entity_id import EntityId

EntityType = Literal["habits", "presets"]


type IdMapDict = dict[EntityType, IdMapMapping]


class IdMap(TypedDict):
    """
    All dictionaries are mapped in the following way:

    Synthetic id : real entity id.

    Habits and presets are stored under uuids, which are awkward to type on
    the command line. Views hand out small synthetic ids instead and commands
    translate them back.

    real_habit_id = id_map["habits"]["synthetic_to_real"][7]
    """

    habits: "IdMapMapping"
    presets: "IdMapMapping"


class IdMapMapping(TypedDict):
    synthetic_to_real: dict[int, EntityId]
    real_to_synthetic: dict[EntityId, int]
