# SPDX-License-Identifier: MIT

import re
from typing import Optional

import pendulum
import typer

from habitual.service.day_of_week import (
    EVERY_DAY,
    WEEKDAYS_ONLY,
    WEEKEND_ONLY,
    mask_from_weekdays,
    weekday_from_label,
)
from habitual.service.reminder import ReminderValidationError, parse_reminder_time
from habitual.time import InvalidDateError, date_from_str, today


def parse_date(date_param: Optional[str | int]) -> Optional[pendulum.Date]:
    """
    Parse a calendar date for a command.

    Accepts YYYY-MM-DD, a day offset from today ("-1", "3"), and the words
    today/t, yesterday/y and tomorrow/o.
    """
    if date_param is None:
        return None

    date_str = str(date_param).strip()

    if re.match(r"^\d{4}-", date_str):
        try:
            return date_from_str(date_str)
        except InvalidDateError as e:
            raise typer.BadParameter(str(e))

    # Match numeric input for relative days (e.g., "1", "-1", "365")
    if re.match(r"^-?\d+$", date_str):
        return today().add(days=int(date_str))

    if date_str in ("today", "t"):
        return today()
    if date_str in ("yesterday", "y"):
        return today().subtract(days=1)
    if date_str in ("tomorrow", "o"):
        return today().add(days=1)
    raise typer.BadParameter(
        f"Incorrect date format: '{date_str}' (expected YYYY-MM-DD, an offset, or today)"
    )


def parse_days(days_param: Optional[str]) -> Optional[int]:
    """
    Parse a day selection into a day-of-week mask.

    Accepts comma-separated day names ("mon,wed,fri"), the shortcuts
    weekdays/weekends/all, or a raw mask between 1 and 127.
    """
    if days_param is None:
        return None

    days_str = days_param.strip().lower()
    shortcuts = {
        "all": EVERY_DAY,
        "everyday": EVERY_DAY,
        "weekdays": WEEKDAYS_ONLY,
        "weekends": WEEKEND_ONLY,
    }
    if days_str in shortcuts:
        return shortcuts[days_str]

    if re.match(r"^\d+$", days_str):
        mask = int(days_str)
        if not 1 <= mask <= EVERY_DAY:
            raise typer.BadParameter(
                f"Day mask must be between 1 and {EVERY_DAY}, got {mask}"
            )
        return mask

    try:
        weekdays = [
            weekday_from_label(label) for label in days_str.split(",") if label.strip()
        ]
    except ValueError as e:
        raise typer.BadParameter(str(e))
    if len(weekdays) == 0:
        raise typer.BadParameter("No days provided")
    return mask_from_weekdays(weekdays)


def parse_reminder(time_param: Optional[str]) -> Optional[int]:
    if time_param is None:
        return None
    try:
        return parse_reminder_time(time_param)
    except ReminderValidationError as e:
        raise typer.BadParameter(str(e))


def parse_id_list(id_param: str) -> list[int]:
    """
    Parse a single ID, comma-separated list of IDs, or ranges of IDs.

    Args:
        id_param: A single ID (e.g., "1"), comma-separated list (e.g., "1,2,3"),
                  range (e.g., "1-5"), or mixed (e.g., "1,3-5,8")

    Returns:
        List of integer IDs (sorted and deduplicated)

    Raises:
        typer.BadParameter: If any ID is not a valid integer or range format is invalid
    """
    id_strings = [s.strip() for s in id_param.split(",")]

    ids: list[int] = []
    for id_str in id_strings:
        if not id_str:
            continue

        if "-" in id_str:
            range_parts = id_str.split("-")
            if len(range_parts) != 2:
                raise typer.BadParameter(
                    f"Invalid range format: '{id_str}' (expected format: 'start-end')"
                )

            try:
                start = int(range_parts[0].strip())
                end = int(range_parts[1].strip())
            except ValueError:
                raise typer.BadParameter(
                    f"Invalid range: '{id_str}' contains non-integer values"
                )

            if start > end:
                raise typer.BadParameter(
                    f"Invalid range: '{id_str}' (start must be <= end)"
                )

            ids.extend(range(start, end + 1))
        else:
            try:
                ids.append(int(id_str))
            except ValueError:
                raise typer.BadParameter(
                    f"Invalid ID: '{id_str}' is not a valid integer"
                )

    if len(ids) == 0:
        raise typer.BadParameter("No valid IDs provided")

    return sorted(set(ids))
