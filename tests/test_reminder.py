import pendulum
import pytest

from habitual.service.reminder import (
    ReminderValidationError,
    make_reminder,
    parse_reminder_time,
    reminders_on,
)
from habitual.template.habit import get_habit_template


@pytest.mark.parametrize(
    "text, minutes",
    [("7:05", 425), ("19:30", 1170), ("7:05 pm", 1145), ("12:00 AM", 0), ("12:15 pm", 735)],
)
def test_parse_reminder_time(text, minutes):
    assert parse_reminder_time(text) == minutes


@pytest.mark.parametrize("text", ["24:00", "7:60", "13:00 pm", "seven", ""])
def test_parse_reminder_time_rejects(text):
    with pytest.raises(ReminderValidationError):
        parse_reminder_time(text)


def test_make_reminder_defaults_and_bounds():
    assert make_reminder() == {
        "minutes_after_midnight": 540,
        "dow_mask": 127,
        "enabled": True,
    }
    with pytest.raises(ReminderValidationError):
        make_reminder(1440)
    with pytest.raises(ReminderValidationError):
        make_reminder(600, dow_mask=0)


def test_reminders_on_filters_by_weekday_and_enabled():
    habit = get_habit_template()
    habit["reminders"] = [
        make_reminder(1200, dow_mask=1),
        make_reminder(480, dow_mask=127),
        make_reminder(600, dow_mask=1, enabled=False),
    ]
    monday = pendulum.date(2024, 1, 1)

    assert [r["minutes_after_midnight"] for r in reminders_on(habit, monday)] == [
        480,
        1200,
    ]
    assert len(reminders_on(habit, monday, include_disabled=True)) == 3
    assert len(reminders_on(habit, monday.add(days=1))) == 1
