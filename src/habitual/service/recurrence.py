# SPDX-License-Identifier: MIT

import datetime
import logging
from collections import Counter
from typing import Any, Mapping, Optional

import pendulum

from habitual.model.habit import Habit
from habitual.model.schedule import ScheduleDefinition
from habitual.service.day_of_week import bit_for_date
from habitual.time import to_date, to_date_optional

logger = logging.getLogger(__name__)

# Malformed schedules seen by the evaluator, keyed by reason.
INVALID_SCHEDULE_COUNTER: Counter[str] = Counter()


def _report_invalid(reason: str, schedule: Mapping[str, Any]) -> None:
    INVALID_SCHEDULE_COUNTER[reason] += 1
    logger.warning(
        "invalid schedule treated as inactive: %s",
        reason,
        extra={"_json_reason": reason, "_json_schedule": dict(schedule)},
    )


def is_active_on(
    schedule: ScheduleDefinition,
    habit_start_date: datetime.date,
    habit_end_date: Optional[datetime.date],
    target_date: datetime.date,
) -> bool:
    """
    Decide whether a schedule is due on the target date.

    Dates are compared as calendar days; datetimes are first converted into
    the configured habit timezone. A malformed schedule never raises: it is
    reported and treated as inactive so one bad record cannot break a batch.
    """
    target = to_date(target_date)
    start = to_date(habit_start_date)
    end = to_date_optional(habit_end_date)

    if target < start:
        return False
    if end is not None and target > end:
        return False

    # Schedules may come straight off disk, so read them loosely
    raw: Mapping[str, Any] = schedule
    schedule_type = raw.get("schedule_type")

    if schedule_type == "daily":
        return True

    if schedule_type == "weekly":
        dow_mask = raw.get("dow_mask")
        if not dow_mask or not isinstance(dow_mask, int):
            _report_invalid("weekly_without_mask", raw)
            return False
        return (dow_mask & bit_for_date(target)) != 0

    if schedule_type == "interval":
        interval_days = raw.get("interval_days")
        if (
            interval_days is None
            or isinstance(interval_days, bool)
            or not isinstance(interval_days, int)
            or interval_days <= 0
        ):
            _report_invalid("interval_without_positive_days", raw)
            return False
        anchor_value = raw.get("start_date")
        anchor = to_date(anchor_value) if anchor_value is not None else start
        days_diff = target.toordinal() - anchor.toordinal()
        return days_diff >= 0 and days_diff % interval_days == 0

    _report_invalid("unknown_schedule_type", raw)
    return False


def is_habit_active_on(habit: Habit, target_date: datetime.date) -> bool:
    return is_active_on(
        habit["schedule"], habit["start_date"], habit["end_date"], target_date
    )


def active_dates_between(
    habit: Habit,
    start_date: datetime.date,
    end_date: datetime.date,
) -> list[pendulum.Date]:
    """All dates in [start_date, end_date] on which the habit is due."""
    current = to_date(start_date)
    last = to_date(end_date)
    dates: list[pendulum.Date] = []
    while current <= last:
        if is_habit_active_on(habit, current):
            dates.append(current)
        current = current.add(days=1)
    return dates


def next_active_date(
    habit: Habit,
    after: datetime.date,
    horizon_days: int = 366 * 2,
) -> Optional[pendulum.Date]:
    """First date strictly after `after` on which the habit is due, if any."""
    current = to_date(after).add(days=1)
    for _ in range(horizon_days):
        if habit["end_date"] is not None and current > to_date(habit["end_date"]):
            return None
        if is_habit_active_on(habit, current):
            return current
        current = current.add(days=1)
    return None
