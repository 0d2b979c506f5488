import pendulum
import pytest

from habitual.service.category import categorize, category_color, filter_by_category
from habitual.service.schedule import interval_schedule
from habitual.template.habit import get_habit_template

ANCHOR = pendulum.date(2024, 1, 1)


def make_habit(name, schedule):
    habit = get_habit_template()
    habit["name"] = name
    habit["schedule"] = schedule
    return habit


def test_daily_and_weekly_types():
    assert categorize({"schedule_type": "daily"}) == "daily"
    assert categorize({"schedule_type": "weekly", "dow_mask": 1}) == "weekly"


@pytest.mark.parametrize(
    "interval_days, category",
    [
        (1, "weekly"),
        (7, "weekly"),
        (27, "weekly"),
        (28, "monthly"),
        (30, "monthly"),
        (31, "monthly"),
        (32, "monthly"),
        (90, "monthly"),
        (359, "monthly"),
        (360, "yearly"),
        (364, "yearly"),
        (365, "yearly"),
        (730, "yearly"),
    ],
)
def test_interval_bands(interval_days, category):
    assert categorize(interval_schedule(interval_days, ANCHOR)) == category


def test_interval_without_days_is_daily_and_logged(caplog):
    assert categorize({"schedule_type": "interval"}) == "daily"
    assert "interval_days" in caplog.text


def test_unknown_type_is_daily():
    assert categorize({"schedule_type": "lunar"}) == "daily"


def test_filter_by_category():
    habits = [
        make_habit("Water", {"schedule_type": "daily"}),
        make_habit("Gym", {"schedule_type": "weekly", "dow_mask": 21}),
        make_habit("Bills", interval_schedule(30, ANCHOR)),
        make_habit("Checkup", interval_schedule(365, ANCHOR)),
    ]

    assert [h["name"] for h in filter_by_category(habits, "all")] == [
        "Water",
        "Gym",
        "Bills",
        "Checkup",
    ]
    assert [h["name"] for h in filter_by_category(habits, "monthly")] == ["Bills"]
    assert [h["name"] for h in filter_by_category(habits, "yearly")] == ["Checkup"]
    assert filter_by_category([], "daily") == []


def test_filter_rejects_unknown_category():
    with pytest.raises(ValueError, match="Invalid category"):
        filter_by_category([], "hourly")


def test_category_colors():
    assert category_color("daily") == "green"
    assert category_color("yearly") == "purple"


@pytest.mark.parametrize("interval_days", ["7", 7.0, True, None, -3])
def test_malformed_interval_days_are_filed_as_daily(interval_days, caplog):
    schedule = {"schedule_type": "interval", "interval_days": interval_days}
    assert categorize(schedule) == "daily"
    assert "interval_days" in caplog.text


def test_one_corrupt_habit_does_not_break_filtering():
    habits = [
        make_habit("Corrupt", {"schedule_type": "interval", "interval_days": "7"}),
        make_habit("Bills", interval_schedule(30, ANCHOR)),
    ]
    assert [h["name"] for h in filter_by_category(habits, "monthly")] == ["Bills"]
    assert [h["name"] for h in filter_by_category(habits, "daily")] == ["Corrupt"]
