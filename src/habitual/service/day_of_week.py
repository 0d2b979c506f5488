# SPDX-License-Identifier: MIT

"""
Day-of-week bitmask encoding.

Masks are Monday-first: Monday is bit 0 (value 1) and Sunday is bit 6
(value 64), so 127 means every day. Call sites go through these helpers
rather than shifting bits themselves, since Python's own weekday numbering
(Monday=0) and the common Sunday=0 numbering both differ from the mask.
"""

import datetime
from enum import IntEnum


class Weekday(IntEnum):
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6


EVERY_DAY = 127
WEEKDAYS_ONLY = 31  # Mon-Fri
WEEKEND_ONLY = 96  # Sat-Sun

WEEKDAY_LABELS: dict[Weekday, str] = {
    Weekday.MONDAY: "Mon",
    Weekday.TUESDAY: "Tue",
    Weekday.WEDNESDAY: "Wed",
    Weekday.THURSDAY: "Thu",
    Weekday.FRIDAY: "Fri",
    Weekday.SATURDAY: "Sat",
    Weekday.SUNDAY: "Sun",
}

WEEKDAY_NAMES: dict[Weekday, str] = {
    Weekday.MONDAY: "Monday",
    Weekday.TUESDAY: "Tuesday",
    Weekday.WEDNESDAY: "Wednesday",
    Weekday.THURSDAY: "Thursday",
    Weekday.FRIDAY: "Friday",
    Weekday.SATURDAY: "Saturday",
    Weekday.SUNDAY: "Sunday",
}


def encode(weekday: Weekday | int) -> int:
    """Return the single mask bit for a Monday-first weekday."""
    return 1 << Weekday(weekday).value


def decode(mask: int) -> list[Weekday]:
    """Weekdays present in the mask, in Monday-first order."""
    return [weekday for weekday in Weekday if mask & encode(weekday)]


def is_set(mask: int, weekday: Weekday | int) -> bool:
    return (mask & encode(weekday)) != 0


def bit_from_sunday_zero(weekday: int) -> int:
    """
    Convert a Sunday=0..Saturday=6 weekday number into its mask bit.

    Sunday sits at the top of the mask (64) even though it is day zero in
    this numbering; every other day shifts down by one.
    """
    if not 0 <= weekday <= 6:
        raise ValueError(f"Weekday must be between 0 and 6, got {weekday}")
    return 64 if weekday == 0 else 2 ** (weekday - 1)


def bit_for_date(date: datetime.date) -> int:
    # isoweekday() is Monday=1..Sunday=7, so modulo 7 gives Sunday=0
    return bit_from_sunday_zero(date.isoweekday() % 7)


def mask_from_weekdays(weekdays: list[Weekday]) -> int:
    mask = 0
    for weekday in weekdays:
        mask |= encode(weekday)
    return mask


def weekday_from_label(label: str) -> Weekday:
    """Resolve 'mon', 'Monday', 'TUE', ... to a Weekday."""
    normalized = label.strip().lower()
    for weekday in Weekday:
        if normalized in (
            WEEKDAY_LABELS[weekday].lower(),
            WEEKDAY_NAMES[weekday].lower(),
        ):
            return weekday
    raise ValueError(f"Unknown weekday: '{label}'")


def is_valid_mask(mask: int) -> bool:
    return 0 < mask <= EVERY_DAY
