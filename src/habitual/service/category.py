# SPDX-License-Identifier: MIT

import logging
from typing import Any, Literal, Mapping, TypeVar, get_args

from habitual.model.habit import Habit
from habitual.model.schedule import ScheduleDefinition

logger = logging.getLogger(__name__)

Category = Literal["daily", "weekly", "monthly", "yearly"]
FilterType = Literal["all", "daily", "weekly", "monthly", "yearly"]
CATEGORIES: tuple[Category, ...] = get_args(Category)

# Colors for the category column and filter tabs
CATEGORY_COLORS: dict[Category, str] = {
    "daily": "green",
    "weekly": "blue",
    "monthly": "dark_orange",
    "yearly": "purple",
}

DAYS_PER_YEAR = 365
DAYS_PER_MONTH = 30
MONTH_BAND = range(28, 32)  # 28..31 days always reads as monthly

H = TypeVar("H", bound=Habit)


def categorize(schedule: ScheduleDefinition) -> Category:
    """
    Map a schedule to the display category it is filed under.

    Interval schedules are banded by length:

        unset, non-integer or non-positive    daily (data-integrity problem, logged)
        1..27       weekly
        28..31      monthly
        32..359     monthly (fewer than twelve 30-day months)
        360..364    yearly (twelve or more 30-day months)
        365+        yearly
    """
    raw: Mapping[str, Any] = schedule
    schedule_type = raw.get("schedule_type")

    if schedule_type == "daily":
        return "daily"
    if schedule_type == "weekly":
        return "weekly"
    if schedule_type == "interval":
        interval_days = raw.get("interval_days")
        if (
            not interval_days
            or isinstance(interval_days, bool)
            or not isinstance(interval_days, int)
            or interval_days <= 0
        ):
            logger.warning(
                "interval schedule without usable interval_days filed as daily",
                extra={"_json_schedule": dict(raw)},
            )
            return "daily"
        if interval_days >= DAYS_PER_YEAR:
            return "yearly"
        if interval_days in MONTH_BAND:
            return "monthly"
        if interval_days >= DAYS_PER_MONTH:
            months = interval_days / DAYS_PER_MONTH
            return "yearly" if months >= 12 else "monthly"
        return "weekly"

    logger.warning(
        "unknown schedule type %r filed as daily",
        schedule_type,
        extra={"_json_schedule": dict(raw)},
    )
    return "daily"


def filter_by_category(habits: list[H], filter_type: FilterType | str) -> list[H]:
    if filter_type == "all":
        return list(habits)
    if filter_type not in CATEGORIES:
        raise ValueError(
            f"Invalid category: {filter_type}. "
            f"Valid options: all, {', '.join(CATEGORIES)}"
        )
    return [habit for habit in habits if categorize(habit["schedule"]) == filter_type]


def category_color(category: Category) -> str:
    return CATEGORY_COLORS.get(category, "bright_black")
