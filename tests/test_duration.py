from datetime import time
from decimal import Decimal

import pytest

from worktracker.domains.work_logs.duration import (
    calculate_hours_worked,
    ends_after_start,
    format_clock_time,
    parse_clock_time,
    round2,
)


@pytest.mark.parametrize(
    ("start", "end", "expected"),
    [
        ("09:00", "17:00", "8.00"),
        ("09:00", "18:00", "9.00"),
        ("08:15", "12:45", "4.50"),
        ("09:00", "17:20", "8.33"),
        ("09:00", "09:50", "0.83"),
        ("10:00", "10:01", "0.02"),
        ("00:00", "23:59", "23.98"),
    ],
)
def test_hours_worked_is_elapsed_time_rounded_to_cents(start, end, expected):
    assert calculate_hours_worked(start, end) == Decimal(expected)


def test_hours_worked_accepts_time_objects():
    assert calculate_hours_worked(time(10, 0), time(16, 0)) == Decimal("6.00")


@pytest.mark.parametrize(("start", "end"), [("17:00", "09:00"), ("12:00", "12:00")])
def test_non_positive_duration_clamps_to_zero(start, end):
    assert calculate_hours_worked(start, end) == Decimal("0.00")


@pytest.mark.parametrize("value", ["9:00", "24:00", "12:60", "noon", "12:00:00", ""])
def test_parse_clock_time_rejects_malformed_values(value):
    with pytest.raises(ValueError, match="HH:MM"):
        parse_clock_time(value)


def test_parse_and_format_clock_time():
    parsed = parse_clock_time("07:05")

    assert parsed == time(7, 5)
    assert format_clock_time(parsed) == "07:05"


def test_ends_after_start_is_strict():
    assert ends_after_start(time(9, 0), time(9, 1))
    assert not ends_after_start(time(9, 0), time(9, 0))
    assert not ends_after_start(time(17, 0), time(9, 0))


def test_round2_rounds_half_up():
    assert round2(Decimal("2.345")) == Decimal("2.35")
    assert round2(Decimal("2.344")) == Decimal("2.34")
