# SPDX-License-Identifier: MIT

import atexit

from habitual.repository.configuration import CONFIGURATION_REPO
from habitual.repository.entry import ENTRY_REPO
from habitual.repository.habit import HABIT_REPO
from habitual.repository.hidden_marker import HIDDEN_MARKER_REPO
from habitual.repository.id_map import ID_MAP_REPO
from habitual.repository.preset import PRESET_REPO


def flush() -> None:
    CONFIGURATION_REPO.flush()
    ID_MAP_REPO.flush()

    # Flush entity repositories
    HABIT_REPO.flush()
    ENTRY_REPO.flush()
    HIDDEN_MARKER_REPO.flush()
    PRESET_REPO.flush()


def register_cleanup() -> None:
    atexit.register(flush)
