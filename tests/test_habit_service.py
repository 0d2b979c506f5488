import pendulum
import pytest

from habitual import events
from habitual.events import EVENT_BUS
from habitual.repository.entry import ENTRY_REPO
from habitual.repository.habit import HABIT_REPO, HabitNotFoundError
from habitual.repository.hidden_marker import HIDDEN_MARKER_REPO
from habitual.service.entry import record_value
from habitual.service.habit import (
    HabitValidationError,
    archive_habit,
    create_habit,
    delete_habit,
    modify_habit,
    unarchive_habit,
    validate_habit,
)
from habitual.service.recurrence import is_habit_active_on
from habitual.service.schedule import interval_schedule
from habitual.service.visibility import hide
from habitual.template.habit import get_habit_template

pytestmark = pytest.mark.usefixtures("data_dir")

START = pendulum.date(2024, 1, 1)


def test_validate_collects_every_issue():
    habit = get_habit_template()
    habit["name"] = "   "
    habit["habit_type"] = "count"
    habit["start_date"] = START
    habit["end_date"] = START
    habit["schedule"] = {"schedule_type": "weekly", "dow_mask": 0}

    fields = [issue["field"] for issue in validate_habit(habit)]
    assert fields == ["name", "target_value", "end_date", "dow_mask"]


def test_validate_accepts_valid_habit():
    habit = get_habit_template()
    habit["name"] = "Stretch"
    assert validate_habit(habit) == []


def test_negative_target_is_rejected():
    with pytest.raises(HabitValidationError) as excinfo:
        create_habit("Water", habit_type="count", target_value=-2, start_date=START)
    assert excinfo.value.first_message == "Target value must be greater than 0"


def test_measured_habit_needs_target():
    with pytest.raises(HabitValidationError) as excinfo:
        create_habit("Run", habit_type="duration", start_date=START)
    assert excinfo.value.issues[0]["field"] == "target_value"


def test_bad_schedule_is_a_validation_error():
    with pytest.raises(HabitValidationError) as excinfo:
        create_habit("Gym", schedule_type="weekly", dow_mask=0, start_date=START)
    assert excinfo.value.issues[0]["field"] == "schedule"
    assert HABIT_REPO.get_all_habits() == []


def test_create_stores_and_publishes():
    received = []
    EVENT_BUS.subscribe(events.HABIT_CREATED, received.append)

    habit_id = create_habit(
        "  Water  ", habit_type="count", target_value=8, unit="glasses", start_date=START
    )

    habit = HABIT_REPO.get_habit(habit_id)
    assert habit["name"] == "Water"
    assert habit["schedule"] == {"schedule_type": "daily"}
    assert [event.habit_id for event in received] == [habit_id]


def test_weekly_every_day_is_stored_as_daily():
    habit_id = create_habit("Walk", schedule_type="weekly", dow_mask=127, start_date=START)
    assert HABIT_REPO.get_schedule(habit_id) == {"schedule_type": "daily"}


def test_interval_anchor_follows_start_date():
    habit_id = create_habit(
        "Water plants", schedule_type="interval", interval_days=3, start_date=START
    )
    assert HABIT_REPO.get_schedule(habit_id)["start_date"] == START

    moved = pendulum.date(2024, 2, 10)
    modify_habit(habit_id, start_date=moved)
    assert HABIT_REPO.get_schedule(habit_id)["start_date"] == moved

    modify_habit(habit_id, schedule=interval_schedule(5, START))
    schedule = HABIT_REPO.get_schedule(habit_id)
    assert schedule["interval_days"] == 5
    assert schedule["start_date"] == moved


def test_rejected_modification_leaves_habit_untouched():
    habit_id = create_habit("Read", start_date=START)
    with pytest.raises(HabitValidationError):
        modify_habit(habit_id, name="", end_date=START.subtract(days=1))

    habit = HABIT_REPO.get_habit(habit_id)
    assert habit["name"] == "Read"
    assert habit["end_date"] is None


def test_modify_can_remove_optional_fields():
    habit_id = create_habit(
        "Read", description="Before bed", color="#fff", start_date=START
    )
    modify_habit(habit_id, remove_description=True, remove_color=True)
    habit = HABIT_REPO.get_habit(habit_id)
    assert habit["description"] is None
    assert habit["color"] is None


def test_archive_and_unarchive():
    habit_id = create_habit("Read", start_date=START)
    archive_habit(habit_id)
    assert HABIT_REPO.get_all_habits() == []
    assert len(HABIT_REPO.get_all_habits(include_archived=True)) == 1

    unarchive_habit(habit_id)
    assert HABIT_REPO.get_habit(habit_id)["archived"] is None


def test_delete_cascades_to_entries_and_markers():
    keep_id = create_habit("Keep", start_date=START)
    habit_id = create_habit("Drop", start_date=START)
    record_value(habit_id, START, 1)
    record_value(keep_id, START, 1)
    hide(habit_id, START.add(days=1))

    received = []
    EVENT_BUS.subscribe(events.HABIT_DELETED, received.append)
    delete_habit(habit_id)

    assert not HABIT_REPO.habit_exists(habit_id)
    assert ENTRY_REPO.get_entries_for_habit(habit_id) == []
    assert not HIDDEN_MARKER_REPO.is_hidden(habit_id, START.add(days=1))
    assert ENTRY_REPO.get_entry_for(keep_id, START) is not None
    assert received[0].payload == {"entries_deleted": 1, "markers_deleted": 1}


def test_unknown_habit_raises():
    with pytest.raises(HabitNotFoundError):
        HABIT_REPO.get_habit("missing")


def test_moving_start_date_moves_interval_due_days():
    habit_id = create_habit(
        "Water plants", schedule_type="interval", interval_days=7, start_date=START
    )
    assert is_habit_active_on(HABIT_REPO.get_habit(habit_id), pendulum.date(2024, 1, 8))

    modify_habit(habit_id, start_date=pendulum.date(2024, 1, 3))
    habit = HABIT_REPO.get_habit(habit_id)
    assert not is_habit_active_on(habit, pendulum.date(2024, 1, 8))
    assert is_habit_active_on(habit, pendulum.date(2024, 1, 10))


def test_non_interval_modification_keeps_schedule():
    habit_id = create_habit("Gym", schedule_type="weekly", dow_mask=21, start_date=START)
    modify_habit(habit_id, start_date=pendulum.date(2024, 2, 1))
    assert HABIT_REPO.get_schedule(habit_id) == {"schedule_type": "weekly", "dow_mask": 21}
