import pendulum
import pytest

from habitual.service.schedule import interval_schedule
from habitual.service.schedule_format import (
    format_days_of_week,
    format_reminder_time,
    format_schedule,
    schedule_helper_text,
)

ANCHOR = pendulum.date(2024, 1, 1)


@pytest.mark.parametrize(
    "mask, label",
    [
        (127, "Every day"),
        (1, "Mon"),
        (64, "Sun"),
        (65, "Mon, Sun"),
        (31, "Mon, Tue, Wed, Thu, Fri"),
    ],
)
def test_format_days_of_week(mask, label):
    assert format_days_of_week(mask) == label


@pytest.mark.parametrize(
    "interval_days, label",
    [
        (1, "Every 1 day"),
        (3, "Every 3 days"),
        (7, "Every 1 week"),
        (14, "Every 2 weeks"),
        (30, "Every 1 month"),
        (90, "Every 3 months"),
        (365, "Every 1 year"),
        (730, "Every 2 years"),
    ],
)
def test_format_interval(interval_days, label):
    assert format_schedule(interval_schedule(interval_days, ANCHOR)) == label


def test_format_daily_weekly_and_unknown():
    assert format_schedule({"schedule_type": "daily"}) == "Daily"
    assert format_schedule({"schedule_type": "weekly", "dow_mask": 96}) == "Sat, Sun"
    assert format_schedule({"schedule_type": "interval", "interval_days": 0}) == "Unknown"
    assert format_schedule({"schedule_type": "sometimes"}) == "Unknown"


def test_helper_text():
    assert schedule_helper_text({"schedule_type": "daily"}) == "Runs every day"
    assert schedule_helper_text(interval_schedule(30, ANCHOR)) == (
        "Runs every 30 days (monthly)"
    )
    assert schedule_helper_text(interval_schedule(365, ANCHOR)) == (
        "Runs every 365 days (yearly)"
    )
    assert schedule_helper_text(interval_schedule(10, ANCHOR)) == ""


@pytest.mark.parametrize(
    "minutes, label",
    [(0, "12:00 AM"), (425, "7:05 AM"), (720, "12:00 PM"), (1170, "7:30 PM"), (1439, "11:59 PM")],
)
def test_format_reminder_time(minutes, label):
    assert format_reminder_time(minutes) == label
