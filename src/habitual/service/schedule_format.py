# SPDX-License-Identifier: MIT

from typing import Any, Mapping

from habitual.model.schedule import ScheduleDefinition
from habitual.service.day_of_week import EVERY_DAY, WEEKDAY_LABELS, decode


def format_days_of_week(dow_mask: int) -> str:
    """
    Comma-joined day abbreviations in Monday-first order.

    format_days_of_week(65) == "Mon, Sun"
    """
    if dow_mask == EVERY_DAY:
        return "Every day"
    return ", ".join(WEEKDAY_LABELS[weekday] for weekday in decode(dow_mask))


def _every(count: int, unit: str) -> str:
    return f"Every {count} {unit}{'s' if count != 1 else ''}"


def format_schedule(schedule: ScheduleDefinition) -> str:
    """Human-readable label for a schedule. Display only."""
    raw: Mapping[str, Any] = schedule
    schedule_type = raw.get("schedule_type")

    if schedule_type == "daily":
        return "Daily"
    if schedule_type == "weekly":
        return format_days_of_week(raw.get("dow_mask") or EVERY_DAY)
    if schedule_type == "interval":
        interval_days = raw.get("interval_days")
        if not isinstance(interval_days, int) or interval_days <= 0:
            return "Unknown"
        if interval_days >= 365:
            return _every(interval_days // 365, "year")
        if interval_days >= 30:
            return _every(interval_days // 30, "month")
        if interval_days >= 7:
            return _every(interval_days // 7, "week")
        return _every(interval_days, "day")
    return "Unknown"


def schedule_helper_text(schedule: ScheduleDefinition) -> str:
    raw: Mapping[str, Any] = schedule
    if raw.get("schedule_type") == "daily":
        return "Runs every day"
    if raw.get("schedule_type") == "interval":
        if raw.get("interval_days") == 30:
            return "Runs every 30 days (monthly)"
        if raw.get("interval_days") == 365:
            return "Runs every 365 days (yearly)"
    return ""


def format_reminder_time(minutes_after_midnight: int) -> str:
    """12-hour clock label, e.g. 425 -> "7:05 AM"."""
    hours, minutes = divmod(minutes_after_midnight, 60)
    period = "PM" if hours >= 12 else "AM"
    display_hours = hours - 12 if hours > 12 else 12 if hours == 0 else hours
    return f"{display_hours}:{minutes:02d} {period}"
