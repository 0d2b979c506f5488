# SPDX-License-Identifier: MIT


class EntityType:
    HABIT = "habit"
    ENTRY = "entry"
    HIDDEN_MARKER = "hidden_marker"
    PRESET = "preset"
