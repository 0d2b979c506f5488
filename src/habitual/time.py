# SPDX-License-Identifier: MIT

import datetime
import re
from typing import Optional, cast

import pendulum

from habitual import state as app_state

_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class InvalidDateError(ValueError):
    """Raised when a calendar date string cannot be parsed."""

    pass


def now_utc() -> pendulum.DateTime:
    return pendulum.now("UTC")


def today() -> pendulum.Date:
    """Today's calendar date in the configured habit timezone."""
    return pendulum.now(app_state.get_timezone()).date()


def to_date(value: datetime.date, tz: Optional[str] = None) -> pendulum.Date:
    """
    Normalize a date or datetime to a calendar date.

    Datetimes are converted into the configured habit timezone before the
    time-of-day component is dropped. Naive datetimes are taken as UTC.
    """
    if isinstance(value, datetime.datetime):
        zone = tz if tz is not None else app_state.get_timezone()
        instance = pendulum.instance(value, tz="UTC")
        return instance.in_tz(zone).date()
    return pendulum.date(value.year, value.month, value.day)


def to_date_optional(
    value: Optional[datetime.date], tz: Optional[str] = None
) -> Optional[pendulum.Date]:
    if value is None:
        return None
    return to_date(value, tz)


def date_from_str(date_str: str) -> pendulum.Date:
    """Parse a 'YYYY-MM-DD' string, raising InvalidDateError when malformed."""
    if not _DATE_PATTERN.match(date_str):
        raise InvalidDateError(f"Expected a YYYY-MM-DD date, got '{date_str}'")
    try:
        return pendulum.from_format(date_str, "YYYY-MM-DD").date()
    except ValueError as e:
        raise InvalidDateError(f"Invalid calendar date '{date_str}': {e}") from e


def date_from_value(value: str | datetime.date) -> pendulum.Date:
    """Read a date back from YAML, which may already have resolved it."""
    if isinstance(value, datetime.date):
        return to_date(value)
    return date_from_str(value)


def date_from_value_optional(
    value: Optional[str | datetime.date],
) -> Optional[pendulum.Date]:
    if value is None:
        return None
    return date_from_value(value)


def date_to_str(date: datetime.date) -> str:
    return date.isoformat()


def date_to_str_optional(date: Optional[datetime.date]) -> Optional[str]:
    if date is None:
        return None
    return date_to_str(date)


def date_to_display_str(date: pendulum.Date) -> str:
    return date.format("YYYY-MM-DD ddd")


def date_to_display_str_optional(date: Optional[pendulum.Date]) -> Optional[str]:
    if date is None:
        return None
    return date_to_display_str(date)


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    return datetime.isoformat()


def datetime_to_iso_str_optional(
    datetime: Optional[pendulum.DateTime],
) -> Optional[str]:
    if datetime is None:
        return None
    return datetime_to_iso_str(datetime)


def datetime_to_display_local_date_str(datetime: pendulum.DateTime) -> str:
    return datetime.in_tz(app_state.get_timezone()).format("YYYY-MM-DD ddd")


def datetime_to_display_local_date_str_optional(
    datetime: Optional[pendulum.DateTime],
) -> Optional[str]:
    if datetime is None:
        return None
    return datetime_to_display_local_date_str(datetime)


def datetime_from_str(datetime: str) -> pendulum.DateTime:
    return cast(pendulum.DateTime, pendulum.parse(datetime))


def datetime_from_str_optional(datetime: Optional[str]) -> Optional[pendulum.DateTime]:
    if datetime is None:
        return None
    return datetime_from_str(datetime)
