import pytest
from typer.testing import CliRunner

from habitual import state as app_state
from habitual.repository.habit import HABIT_REPO
from habitual.terminal.app import app

pytestmark = pytest.mark.usefixtures("data_dir")

runner = CliRunner()

DAY = "2024-01-10"


def invoke(*args: str):
    return runner.invoke(app, ["--no-header", *args], env={"COLUMNS": "200"})


def add_water():
    result = invoke(
        "habit", "add", "Water", "--type", "count", "--target", "8", "--start", "2024-01-01"
    )
    assert result.exit_code == 0, result.output


def test_add_and_list():
    add_water()
    result = invoke("habit", "list")
    assert result.exit_code == 0
    assert "Water" in result.output
    assert "daily" in result.output


def test_add_rejects_invalid_habit():
    result = invoke("habit", "add", "Run", "--type", "duration", "--start", "2024-01-01")
    assert result.exit_code == 1
    assert "target" in result.output.lower()
    assert HABIT_REPO.get_all_habits() == []


def test_add_weekly_from_days():
    result = invoke("hb", "a", "Gym", "--days", "mon,wed,fri", "--start", "2024-01-01")
    assert result.exit_code == 0, result.output
    assert HABIT_REPO.get_all_habits()[0]["schedule"] == {
        "schedule_type": "weekly",
        "dow_mask": 21,
    }


def test_log_today_hide_and_unhide_all():
    add_water()

    result = invoke("today", DAY)
    assert result.exit_code == 0
    assert "Water" in result.output
    assert "pending" in result.output

    result = invoke("log", "1", "3", "--date", DAY)
    assert result.exit_code == 0, result.output
    assert "3/8" in result.output

    result = invoke("hide", "1", "-d", DAY)
    assert result.exit_code == 0
    assert "Hid Water" in result.output

    result = invoke("td", DAY)
    assert "Water" not in result.output
    assert "1 hidden" in result.output

    result = invoke("hidden", "-d", DAY)
    assert "Water" in result.output

    result = invoke("uha", "-d", DAY)
    assert result.exit_code == 0
    assert "Unhid 1 habit" in result.output

    result = invoke("today", DAY)
    assert "Water" in result.output
    assert "pending" in result.output


def test_log_on_hidden_day_fails():
    add_water()
    invoke("today", DAY)
    invoke("hide", "1", "-d", DAY)

    result = invoke("log", "1", "2", "-d", DAY)
    assert result.exit_code == 1
    assert "hidden" in result.output


def test_malformed_date_is_rejected():
    result = invoke("today", "2024-02-30")
    assert result.exit_code != 0


def test_unknown_id_is_reported():
    invoke("today", DAY)
    result = invoke("log", "9")
    assert result.exit_code == 1
    assert "Unknown habit id" in result.output


def test_preset_apply():
    result = invoke("preset", "list")
    assert result.exit_code == 0
    assert "Meditation" in result.output

    # Built-ins are listed alphabetically within their category
    result = invoke("preset", "apply", "1", "--start", "2024-01-01")
    assert result.exit_code == 0, result.output
    assert len(HABIT_REPO.get_all_habits()) == 1


def test_config_rejects_unknown_timezone():
    result = invoke("config", "set", "--timezone", "Mars/Olympus")
    assert result.exit_code != 0


def test_no_clear_ids_keeps_existing_ids():
    add_water()
    invoke("today", DAY)
    result = invoke("habit", "add", "Apple", "--start", "2024-01-01")
    assert result.exit_code == 0, result.output

    invoke("--no-clear-ids", "today", DAY)
    assert not app_state.get_clear_ids()

    # Water kept id 1 even though Apple now sorts first
    result = invoke("log", "1", "2", "--date", DAY)
    assert result.exit_code == 0, result.output
    assert "Water" in result.output


def test_clear_ids_renumbers_views():
    add_water()
    invoke("today", DAY)
    invoke("habit", "add", "Apple", "--start", "2024-01-01")

    invoke("--clear-ids", "today", DAY)
    assert app_state.get_clear_ids()

    result = invoke("log", "1", "--date", DAY)
    assert result.exit_code == 0, result.output
    assert "Apple" in result.output
