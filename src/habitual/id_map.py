# SPDX-License-Identifier: MIT

from habitual import state as app_state
from habitual.repository.id_map import ID_MAP_REPO


def clear_id_map_if_required() -> None:
    """Hand out fresh synthetic ids for the view about to be shown."""
    if app_state.get_clear_ids():
        ID_MAP_REPO.clear_ids()
