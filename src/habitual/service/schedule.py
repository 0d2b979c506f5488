# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum

from habitual.model.schedule import (
    SCHEDULE_TYPES,
    DailySchedule,
    IntervalSchedule,
    ScheduleDefinition,
    WeeklySchedule,
)
from habitual.service.day_of_week import EVERY_DAY, is_valid_mask


class ScheduleValidationError(ValueError):
    """Raised when a schedule definition breaks its invariants."""

    pass


def daily_schedule() -> DailySchedule:
    return {"schedule_type": "daily"}


def weekly_schedule(dow_mask: int) -> DailySchedule | WeeklySchedule:
    """
    Build a weekly schedule.

    A mask covering all seven days is normalized to a daily schedule.
    """
    if not is_valid_mask(dow_mask):
        raise ScheduleValidationError(
            "Please select at least one day for weekly habits "
            f"(mask must be between 1 and {EVERY_DAY}, got {dow_mask})."
        )
    if dow_mask == EVERY_DAY:
        return daily_schedule()
    return {"schedule_type": "weekly", "dow_mask": dow_mask}


def interval_schedule(interval_days: int, anchor: pendulum.Date) -> IntervalSchedule:
    if isinstance(interval_days, bool) or not isinstance(interval_days, int):
        raise ScheduleValidationError(
            f"Interval must be a whole number of days, got {interval_days!r}"
        )
    if interval_days <= 0:
        raise ScheduleValidationError(
            f"Interval must be a positive number of days, got {interval_days}"
        )
    return {
        "schedule_type": "interval",
        "interval_days": interval_days,
        "start_date": anchor,
    }


def make_schedule(
    schedule_type: str,
    anchor: pendulum.Date,
    dow_mask: Optional[int] = None,
    interval_days: Optional[int] = None,
) -> ScheduleDefinition:
    """Build a schedule from loose form-style fields."""
    if schedule_type == "daily":
        return daily_schedule()
    if schedule_type == "weekly":
        if dow_mask is None:
            raise ScheduleValidationError("Weekly schedules require a day mask.")
        return weekly_schedule(dow_mask)
    if schedule_type == "interval":
        if interval_days is None:
            raise ScheduleValidationError(
                "Interval schedules require a number of days."
            )
        return interval_schedule(interval_days, anchor)
    raise ScheduleValidationError(
        f"Unknown schedule type: {schedule_type}. "
        f"Valid options: {', '.join(SCHEDULE_TYPES)}"
    )


def reanchor_schedule(
    schedule: ScheduleDefinition, anchor: pendulum.Date
) -> ScheduleDefinition:
    """
    Return the schedule with its interval anchor set to the given date.

    The habit's start date is the single anchor for interval arithmetic, so
    whoever changes one must pass the other through here.
    """
    if schedule["schedule_type"] == "interval":
        return {
            "schedule_type": "interval",
            "interval_days": schedule["interval_days"],
            "start_date": anchor,
        }
    return schedule


def schedule_dow_mask(schedule: ScheduleDefinition) -> int:
    """The weekday mask a schedule implies, as stored on presets and forms."""
    if schedule["schedule_type"] == "weekly":
        return schedule["dow_mask"]
    return EVERY_DAY
