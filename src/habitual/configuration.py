# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import NotRequired, Optional, TypedDict

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs

APP_NAME = "habitual"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"
LOG_PATH = platformdirs.user_log_path(APP_NAME)

# These will be set dynamically by load_data_path_configuration()
DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)
DATA_ID_MAP_PATH: Path = DATA_PATH / "id_map.yaml"
DATA_HABITS_DIR: Path = DATA_PATH / "habits"
DATA_ENTRIES_DIR: Path = DATA_PATH / "entries"
DATA_HIDDEN_DIR: Path = DATA_PATH / "hidden"
DATA_PRESETS_DIR: Path = DATA_PATH / "presets"

DEFAULT_TIMEZONE = "local"


class Configuration(TypedDict):
    show_header: bool
    data_path: Optional[str]
    timezone: str
    clear_ids_on_view: bool
    random_color_for_habits: bool
    log_level: NotRequired[str]


def get_default_configuration() -> Configuration:
    return {
        "show_header": True,
        "data_path": None,
        "timezone": DEFAULT_TIMEZONE,
        "clear_ids_on_view": True,
        "random_color_for_habits": False,
        "log_level": "INFO",
    }


def set_data_path(data_path: Path) -> None:
    global \
        DATA_PATH, \
        DATA_ID_MAP_PATH, \
        DATA_HABITS_DIR, \
        DATA_ENTRIES_DIR, \
        DATA_HIDDEN_DIR, \
        DATA_PRESETS_DIR

    DATA_PATH = data_path
    DATA_ID_MAP_PATH = DATA_PATH / "id_map.yaml"
    DATA_HABITS_DIR = DATA_PATH / "habits"
    DATA_ENTRIES_DIR = DATA_PATH / "entries"
    DATA_HIDDEN_DIR = DATA_PATH / "hidden"
    DATA_PRESETS_DIR = DATA_PATH / "presets"


def load_data_path_configuration() -> None:
    """
    Load the configuration and set the DATA_PATH variables dynamically.

    This must be called after the config file exists and before any
    repositories load their data.
    """
    if not APP_CONFIG_PATH.is_file():
        # Config doesn't exist yet, use defaults
        return

    config: Optional[Configuration] = load(APP_CONFIG_PATH.read_text(), Loader=Loader)
    if config is None:
        return

    data_path_setting = config.get("data_path")
    if data_path_setting is not None:
        set_data_path(Path(data_path_setting).expanduser())
