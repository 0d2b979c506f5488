import pendulum
import pytest

from habitual import events
from habitual.events import EVENT_BUS
from habitual.repository.entry import ENTRY_REPO
from habitual.repository.habit import HabitNotFoundError
from habitual.service.entry import EntryValidationError, record_value
from habitual.service.habit import archive_habit, create_habit
from habitual.service.visibility import (
    hidden_count_on,
    hidden_habits_on,
    hide,
    unhide,
    unhide_all,
    visibility_state,
    visible_habits_on,
)

pytestmark = pytest.mark.usefixtures("data_dir")

START = pendulum.date(2024, 1, 1)  # Monday
DAY = pendulum.date(2024, 1, 10)


def names(habits):
    return [habit["name"] for habit in habits]


def test_visible_habits_are_sorted_by_name():
    create_habit("Stretch", start_date=START)
    create_habit("Meditate", start_date=START)
    create_habit("Journal", start_date=START)
    assert names(visible_habits_on(DAY)) == ["Journal", "Meditate", "Stretch"]


def test_same_names_are_ordered_by_id():
    first = create_habit("Walk", start_date=START)
    second = create_habit("Walk", start_date=START)
    ids = [habit["id"] for habit in visible_habits_on(DAY)]
    assert ids == sorted([first, second])


def test_schedule_and_archive_filter_visibility():
    create_habit("Daily", start_date=START)
    create_habit("Mondays", schedule_type="weekly", dow_mask=1, start_date=START)
    create_habit("Later", start_date=DAY.add(days=1))
    archived = create_habit("Old", start_date=START)
    archive_habit(archived)

    # 2024-01-10 is a Wednesday
    assert names(visible_habits_on(DAY)) == ["Daily"]
    assert names(visible_habits_on(pendulum.date(2024, 1, 15))) == [
        "Daily",
        "Later",
        "Mondays",
    ]


def test_hide_then_unhide_all_restores():
    water = create_habit("Water", start_date=START)
    create_habit("Read", start_date=START)

    assert hide(water, DAY)
    assert names(visible_habits_on(DAY)) == ["Read"]
    assert hidden_count_on(DAY) == 1
    assert names(hidden_habits_on(DAY)) == ["Water"]

    assert unhide_all(DAY) == 1
    assert names(visible_habits_on(DAY)) == ["Read", "Water"]
    assert hidden_count_on(DAY) == 0


def test_hide_only_affects_one_date():
    water = create_habit("Water", start_date=START)
    hide(water, DAY)
    assert names(visible_habits_on(DAY.add(days=1))) == ["Water"]


def test_hide_is_idempotent():
    water = create_habit("Water", start_date=START)
    assert hide(water, DAY)
    assert not hide(water, DAY)
    assert hidden_count_on(DAY) == 1
    assert unhide_all(DAY) == 1
    assert unhide_all(DAY) == 0


def test_unhide_single_habit():
    water = create_habit("Water", start_date=START)
    assert not unhide(water, DAY)
    hide(water, DAY)
    assert unhide(water, DAY)
    assert visibility_state(water, DAY) == "pending"


def test_hide_discards_recorded_value():
    water = create_habit("Water", start_date=START)
    record_value(water, DAY, 1)

    received = []
    EVENT_BUS.subscribe(events.ALL_EVENTS, received.append)
    hide(water, DAY)

    assert ENTRY_REPO.get_entry_for(water, DAY) is None
    assert [event.event_type for event in received] == [
        events.ENTRY_CLEARED,
        events.HABIT_HIDDEN,
    ]

    unhide(water, DAY)
    assert visibility_state(water, DAY) == "pending"


def test_visibility_state_transitions():
    water = create_habit("Water", start_date=START)
    assert visibility_state(water, DAY) == "pending"
    record_value(water, DAY, 1)
    assert visibility_state(water, DAY) == "done"
    hide(water, DAY)
    assert visibility_state(water, DAY) == "hidden"


def test_recording_on_hidden_date_is_rejected():
    water = create_habit("Water", start_date=START)
    hide(water, DAY)
    with pytest.raises(EntryValidationError, match="hidden"):
        record_value(water, DAY, 1)


def test_hide_unknown_habit_raises():
    with pytest.raises(HabitNotFoundError):
        hide("missing", DAY)


def test_unhide_all_publishes_count_once():
    received = []
    EVENT_BUS.subscribe(events.HIDDEN_CLEARED, received.append)
    for name in ("A", "B", "C"):
        hide(create_habit(name, start_date=START), DAY)

    assert unhide_all(DAY) == 3
    assert unhide_all(DAY) == 0
    assert [event.payload for event in received] == [{"count": 3}]
