from pathlib import Path

import pytest

from habitual import configuration
from habitual import state as app_state
from habitual.cleanup import flush
from habitual.events import EVENT_BUS
from habitual.initialize import initialize
from habitual.repository.configuration import CONFIGURATION_REPO
from habitual.repository.entry import ENTRY_REPO
from habitual.repository.habit import HABIT_REPO
from habitual.repository.hidden_marker import HIDDEN_MARKER_REPO
from habitual.repository.id_map import ID_MAP_REPO
from habitual.repository.preset import PRESET_REPO
from habitual.service.recurrence import INVALID_SCHEDULE_COUNTER

REPOSITORIES = (
    CONFIGURATION_REPO,
    ID_MAP_REPO,
    HABIT_REPO,
    ENTRY_REPO,
    HIDDEN_MARKER_REPO,
    PRESET_REPO,
)


def reset_repositories() -> None:
    # Drop cached data so the next access reads from disk
    for repository in REPOSITORIES:
        repository.__init__()  # type: ignore[misc]


@pytest.fixture()
def data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    config_dir = tmp_path / "config"
    monkeypatch.setattr(configuration, "CONFIG_PATH", config_dir)
    monkeypatch.setattr(configuration, "APP_CONFIG_PATH", config_dir / "config.yaml")
    configuration.set_data_path(tmp_path / "data")

    reset_repositories()
    EVENT_BUS.clear()
    INVALID_SCHEDULE_COUNTER.clear()

    initialize()
    app_state.set_timezone("UTC")

    yield tmp_path / "data"

    reset_repositories()
    EVENT_BUS.clear()


@pytest.fixture()
def reload_repositories(data_dir):
    """Flush everything to disk and forget the cached data."""

    def reload() -> None:
        flush()
        reset_repositories()

    return reload
