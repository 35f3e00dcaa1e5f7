from datetime import time, timedelta
from decimal import Decimal

import pytest
from conftest import utc

from charging_profile.core.exceptions import TimeOfDayParseError
from charging_profile.core.time_windows import (
    add_hours,
    hours_between,
    parse_leaving_time_of_day,
    parse_starting_time,
    parse_tariff_time_of_day,
    resolve_leaving_time,
    resolve_tariff_window,
)


def test_leaving_time_later_same_day():
    assert resolve_leaving_time("17:30", utc(2024, 6, 30, 8, 0)) == utc(2024, 6, 30, 17, 30)


def test_leaving_time_earlier_rolls_to_next_day():
    assert resolve_leaving_time("07:00", utc(2024, 6, 30, 8, 0)) == utc(2024, 7, 1, 7, 0)


def test_leaving_time_equal_to_reference_rolls_to_next_day():
    assert resolve_leaving_time("08:00", utc(2024, 6, 30, 8, 0)) == utc(2024, 7, 1, 8, 0)


def test_leaving_time_crosses_month_end():
    assert resolve_leaving_time("00:15", utc(2024, 12, 31, 23, 0)) == utc(2025, 1, 1, 0, 15)


@pytest.mark.parametrize("value", ["7:00", "24:00", "07:60", "0700", "07:00:00", "", None])
def test_leaving_time_rejects_malformed_values(value):
    with pytest.raises(TimeOfDayParseError):
        parse_leaving_time_of_day(value)


@pytest.mark.parametrize(
    "value,expected",
    [("7:30", time(7, 30)), ("07:30", time(7, 30)), ("0:00", time(0, 0)), ("23:59", time(23, 59))],
)
def test_tariff_time_accepts_unpadded_hour(value, expected):
    assert parse_tariff_time_of_day(value) == expected


@pytest.mark.parametrize("value", ["24:00", "7:5", "7", "abc", "", None])
def test_tariff_time_rejects_malformed_values(value):
    with pytest.raises(TimeOfDayParseError):
        parse_tariff_time_of_day(value)


def test_starting_time_is_normalized_to_utc():
    assert parse_starting_time("2024-06-30T10:00:00+02:00") == utc(2024, 6, 30, 8, 0)
    assert parse_starting_time("2024-06-30T08:00:00Z") == utc(2024, 6, 30, 8, 0)


def test_starting_time_without_offset_is_taken_as_utc():
    assert parse_starting_time("2024-06-30T08:00:00") == utc(2024, 6, 30, 8, 0)


@pytest.mark.parametrize("value", ["not-a-date", "", "   ", None])
def test_starting_time_rejects_garbage(value):
    with pytest.raises(TimeOfDayParseError):
        parse_starting_time(value)


def test_tariff_window_same_day():
    start, end = resolve_tariff_window("13:15", "19:15", utc(2024, 6, 30, 8, 0))
    assert start == utc(2024, 6, 30, 13, 15)
    assert end == utc(2024, 6, 30, 19, 15)


def test_tariff_window_crossing_midnight():
    start, end = resolve_tariff_window("19:15", "10:00", utc(2024, 6, 30, 8, 0))
    assert start == utc(2024, 6, 30, 19, 15)
    assert end == utc(2024, 7, 1, 10, 0)


def test_tariff_window_equal_bounds_spans_a_full_day():
    start, end = resolve_tariff_window("6:00", "6:00", utc(2024, 6, 30, 5, 0))
    assert start == utc(2024, 6, 30, 6, 0)
    assert end == utc(2024, 7, 1, 6, 0)


def test_tariff_window_already_started_is_clamped_to_reference():
    reference = utc(2024, 6, 30, 12, 24)
    start, end = resolve_tariff_window("8:00", "13:15", reference)
    assert start == reference
    assert end == utc(2024, 6, 30, 13, 15)


def test_tariff_window_already_over_moves_to_next_day():
    start, end = resolve_tariff_window("8:00", "10:00", utc(2024, 6, 30, 12, 0))
    assert start == utc(2024, 7, 1, 8, 0)
    assert end == utc(2024, 7, 1, 10, 0)


def test_tariff_window_ending_at_reference_moves_to_next_day():
    start, end = resolve_tariff_window("8:00", "12:00", utc(2024, 6, 30, 12, 0))
    assert start == utc(2024, 7, 1, 8, 0)
    assert end == utc(2024, 7, 1, 12, 0)


def test_tariff_window_rejects_bad_time():
    with pytest.raises(TimeOfDayParseError):
        resolve_tariff_window("25:00", "10:00", utc(2024, 6, 30, 8, 0))


def test_hours_arithmetic_is_decimal():
    start = utc(2024, 6, 30, 8, 0)
    assert hours_between(start, utc(2024, 6, 30, 12, 24)) == Decimal("4.4")
    assert add_hours(start, Decimal("4.4")) == utc(2024, 6, 30, 12, 24)
    assert add_hours(start, Decimal(1) / Decimal(3)) - start == timedelta(minutes=20)
