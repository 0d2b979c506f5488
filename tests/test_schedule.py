import pendulum
import pytest

from habitual.service.schedule import (
    ScheduleValidationError,
    interval_schedule,
    make_schedule,
    reanchor_schedule,
    schedule_dow_mask,
    weekly_schedule,
)

ANCHOR = pendulum.date(2024, 3, 1)


def test_weekly_keeps_partial_masks():
    assert weekly_schedule(21) == {"schedule_type": "weekly", "dow_mask": 21}


def test_weekly_every_day_becomes_daily():
    assert weekly_schedule(127) == {"schedule_type": "daily"}


@pytest.mark.parametrize("mask", [0, -1, 128])
def test_weekly_rejects_masks_outside_range(mask):
    with pytest.raises(ScheduleValidationError):
        weekly_schedule(mask)


@pytest.mark.parametrize("days", [0, -7, 2.5, True, "7"])
def test_interval_rejects_non_positive_or_non_integer_days(days):
    with pytest.raises(ScheduleValidationError):
        interval_schedule(days, ANCHOR)


def test_interval_carries_anchor():
    assert interval_schedule(3, ANCHOR) == {
        "schedule_type": "interval",
        "interval_days": 3,
        "start_date": ANCHOR,
    }


def test_make_schedule_requires_type_specific_fields():
    with pytest.raises(ScheduleValidationError):
        make_schedule("weekly", ANCHOR)
    with pytest.raises(ScheduleValidationError):
        make_schedule("interval", ANCHOR)
    with pytest.raises(ScheduleValidationError, match="Unknown schedule type"):
        make_schedule("fortnightly", ANCHOR)


def test_make_schedule_daily_ignores_extra_fields():
    assert make_schedule("daily", ANCHOR, dow_mask=3, interval_days=4) == {
        "schedule_type": "daily"
    }


def test_reanchor_only_touches_interval_schedules():
    moved = pendulum.date(2024, 4, 15)
    assert reanchor_schedule(interval_schedule(5, ANCHOR), moved)["start_date"] == moved
    weekly = weekly_schedule(3)
    assert reanchor_schedule(weekly, moved) == weekly


def test_schedule_dow_mask():
    assert schedule_dow_mask(weekly_schedule(96)) == 96
    assert schedule_dow_mask({"schedule_type": "daily"}) == 127
    assert schedule_dow_mask(interval_schedule(2, ANCHOR)) == 127
