# SPDX-License-Identifier: MIT

import datetime
import re

from habitual.model.habit import Habit, Reminder
from habitual.service.day_of_week import EVERY_DAY, bit_for_date, is_valid_mask

MINUTES_PER_DAY = 24 * 60
DEFAULT_REMINDER_MINUTES = 9 * 60  # 9:00 AM

_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})\s*(am|pm)?$", re.IGNORECASE)


class ReminderValidationError(ValueError):
    pass


def parse_reminder_time(time_str: str) -> int:
    """
    Parse '7:05', '19:30' or '7:05 pm' into minutes after midnight.
    """
    match = _TIME_PATTERN.match(time_str.strip())
    if match is None:
        raise ReminderValidationError(
            f"Expected a time like 07:30 or 7:30 PM, got '{time_str}'"
        )
    hours, minutes, period = int(match.group(1)), int(match.group(2)), match.group(3)
    if period is not None:
        if not 1 <= hours <= 12:
            raise ReminderValidationError(f"Hour must be 1-12 with AM/PM: '{time_str}'")
        hours = hours % 12 + (12 if period.lower() == "pm" else 0)
    if hours > 23 or minutes > 59:
        raise ReminderValidationError(f"Time out of range: '{time_str}'")
    return hours * 60 + minutes


def make_reminder(
    minutes_after_midnight: int = DEFAULT_REMINDER_MINUTES,
    dow_mask: int = EVERY_DAY,
    enabled: bool = True,
) -> Reminder:
    if not 0 <= minutes_after_midnight < MINUTES_PER_DAY:
        raise ReminderValidationError(
            f"Reminder time must be within the day (0-{MINUTES_PER_DAY - 1} minutes), "
            f"got {minutes_after_midnight}"
        )
    if not is_valid_mask(dow_mask):
        raise ReminderValidationError(
            f"Reminder days must select at least one day, got mask {dow_mask}"
        )
    return {
        "minutes_after_midnight": minutes_after_midnight,
        "dow_mask": dow_mask,
        "enabled": enabled,
    }


def reminders_on(
    habit: Habit, date: datetime.date, include_disabled: bool = False
) -> list[Reminder]:
    """Reminders of a habit that fall on the weekday of a date, earliest first."""
    day_bit = bit_for_date(date)
    return sorted(
        [
            reminder
            for reminder in habit["reminders"]
            if (include_disabled or reminder["enabled"])
            and reminder["dow_mask"] & day_bit
        ],
        key=lambda reminder: reminder["minutes_after_midnight"],
    )
