# SPDX-License-Identifier: MIT

from pathlib import Path

from yaml import dump

try:
    from yaml import CDumper as Dumper
except ImportError:
    from yaml import Dumper  # type: ignore[assignment]

from habitual import configuration
from habitual import state as app_state
from habitual.model.id_map import IdMap
from habitual.repository.configuration import CONFIGURATION_REPO
from habitual.service.preset import seed_default_presets
from habitual.template.id_map import get_id_map_template
from habitual.view import state as view_state


def initialize() -> None:
    configuration.CONFIG_PATH.mkdir(parents=True, exist_ok=True)
    configuration.load_data_path_configuration()
    configuration.DATA_PATH.mkdir(parents=True, exist_ok=True)

    __ensure_config_files()
    presets_created = __ensure_data_files()

    config = CONFIGURATION_REPO.get_config()
    view_state.set_show_header(config["show_header"])
    app_state.set_clear_ids(config["clear_ids_on_view"])
    app_state.set_timezone(config["timezone"])

    # Built-in presets go in once, when the presets directory is first made
    if presets_created:
        seed_default_presets()


def __ensure_config_files() -> None:
    if not configuration.APP_CONFIG_PATH.is_file():
        configuration.APP_CONFIG_PATH.touch()
        config = configuration.get_default_configuration()
        configuration.APP_CONFIG_PATH.write_text(dump(config, Dumper=Dumper))


def __ensure_entity_dir(path: Path) -> bool:
    if path.is_dir():
        return False
    path.mkdir(parents=True, exist_ok=True)
    (path / ".gitkeep").touch()
    return True


def __ensure_data_files() -> bool:
    if not configuration.DATA_ID_MAP_PATH.is_file():
        configuration.DATA_ID_MAP_PATH.touch()
        id_map: IdMap = get_id_map_template()
        configuration.DATA_ID_MAP_PATH.write_text(dump(id_map, Dumper=Dumper))

    # Directory-based entity stores (one file per entity)
    __ensure_entity_dir(configuration.DATA_HABITS_DIR)
    __ensure_entity_dir(configuration.DATA_ENTRIES_DIR)
    __ensure_entity_dir(configuration.DATA_HIDDEN_DIR)
    return __ensure_entity_dir(configuration.DATA_PRESETS_DIR)
