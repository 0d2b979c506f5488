import pendulum
import pytest

from habitual.service.day_of_week import (
    EVERY_DAY,
    WEEKDAYS_ONLY,
    WEEKEND_ONLY,
    Weekday,
    bit_for_date,
    bit_from_sunday_zero,
    decode,
    encode,
    is_set,
    is_valid_mask,
    mask_from_weekdays,
    weekday_from_label,
)


def test_encode_is_monday_first():
    assert encode(Weekday.MONDAY) == 1
    assert encode(Weekday.WEDNESDAY) == 4
    assert encode(Weekday.SUNDAY) == 64
    assert sum(encode(weekday) for weekday in Weekday) == EVERY_DAY


def test_decode_keeps_monday_first_order():
    # Sunday's bit is the largest but still comes last
    assert decode(65) == [Weekday.MONDAY, Weekday.SUNDAY]
    assert decode(0) == []
    assert decode(EVERY_DAY) == list(Weekday)


def test_shortcut_masks():
    assert decode(WEEKDAYS_ONLY) == [
        Weekday.MONDAY,
        Weekday.TUESDAY,
        Weekday.WEDNESDAY,
        Weekday.THURSDAY,
        Weekday.FRIDAY,
    ]
    assert decode(WEEKEND_ONLY) == [Weekday.SATURDAY, Weekday.SUNDAY]


@pytest.mark.parametrize(
    "sunday_zero, bit",
    [(0, 64), (1, 1), (2, 2), (3, 4), (4, 8), (5, 16), (6, 32)],
)
def test_bit_from_sunday_zero(sunday_zero, bit):
    assert bit_from_sunday_zero(sunday_zero) == bit


@pytest.mark.parametrize("weekday", [-1, 7, 10])
def test_bit_from_sunday_zero_rejects_out_of_range(weekday):
    with pytest.raises(ValueError):
        bit_from_sunday_zero(weekday)


def test_bit_for_date_matches_calendar():
    # 2024-01-01 was a Monday
    monday = pendulum.date(2024, 1, 1)
    assert bit_for_date(monday) == 1
    assert bit_for_date(monday.add(days=5)) == 32
    assert bit_for_date(monday.add(days=6)) == 64


def test_mask_round_trip_through_weekdays():
    weekdays = [Weekday.MONDAY, Weekday.WEDNESDAY, Weekday.FRIDAY]
    mask = mask_from_weekdays(weekdays)
    assert mask == 21
    assert is_set(mask, Weekday.WEDNESDAY)
    assert not is_set(mask, Weekday.TUESDAY)


def test_weekday_from_label_accepts_short_and_full_names():
    assert weekday_from_label("mon") == Weekday.MONDAY
    assert weekday_from_label(" Sunday ") == Weekday.SUNDAY
    with pytest.raises(ValueError):
        weekday_from_label("funday")


def test_is_valid_mask():
    assert is_valid_mask(1)
    assert is_valid_mask(EVERY_DAY)
    assert not is_valid_mask(0)
    assert not is_valid_mask(128)
