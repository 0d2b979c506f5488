import datetime

import pendulum
import pytest

from habitual.time import (
    InvalidDateError,
    date_from_str,
    date_from_value,
    date_to_display_str,
    to_date,
)


def test_date_from_str():
    assert date_from_str("2024-02-29") == pendulum.date(2024, 2, 29)


@pytest.mark.parametrize("text", ["2023-02-29", "2024-13-01", "24-01-01", "2024/01/01", ""])
def test_date_from_str_rejects_malformed(text):
    with pytest.raises(InvalidDateError):
        date_from_str(text)


def test_date_from_value_accepts_yaml_dates():
    assert date_from_value(datetime.date(2024, 1, 5)) == pendulum.date(2024, 1, 5)
    assert date_from_value("2024-01-05") == pendulum.date(2024, 1, 5)


def test_to_date_uses_given_timezone():
    instant = datetime.datetime(2024, 1, 1, 23, 30, tzinfo=datetime.timezone.utc)
    assert to_date(instant, tz="UTC") == pendulum.date(2024, 1, 1)
    assert to_date(instant, tz="Asia/Tokyo") == pendulum.date(2024, 1, 2)


def test_naive_datetimes_are_utc():
    assert to_date(datetime.datetime(2024, 1, 1, 23, 30), tz="Asia/Tokyo") == (
        pendulum.date(2024, 1, 2)
    )


def test_display_format():
    assert date_to_display_str(pendulum.date(2024, 1, 1)) == "2024-01-01 Mon"


def test_date_from_str_returns_pendulum_date():
    parsed = date_from_str("2024-12-31")
    assert isinstance(parsed, pendulum.Date)
    assert not isinstance(parsed, pendulum.DateTime)
    assert parsed.day_of_week == pendulum.TUESDAY


@pytest.mark.parametrize("text", ["2024-02-30", "2024-00-10", "2024-04-31"])
def test_impossible_calendar_dates_are_invalid(text):
    with pytest.raises(InvalidDateError, match="Invalid calendar date"):
        date_from_str(text)
