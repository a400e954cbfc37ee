"""Shift duration arithmetic.

Times are same-day wall-clock values; overnight shifts are not supported, so an
end time at or before the start time never yields a positive duration.
"""
from __future__ import annotations

from datetime import datetime, time
from decimal import ROUND_HALF_UP, Decimal

CLOCK_FORMAT = "%H:%M"
CENTS = Decimal("0.01")
_REFERENCE_DAY = datetime(1970, 1, 1)


def round2(value: Decimal) -> Decimal:
    """Round half-up to two decimal places."""
    return Decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


def parse_clock_time(value: str) -> time:
    """Parse ``HH:MM`` (24-hour) into a ``time``; raises ``ValueError`` otherwise."""
    text = value.strip()
    if len(text) != 5 or text[2] != ":":
        raise ValueError("Invalid time format (HH:MM)")
    try:
        return datetime.strptime(text, CLOCK_FORMAT).time()
    except ValueError as exc:
        raise ValueError("Invalid time format (HH:MM)") from exc


def format_clock_time(value: time) -> str:
    return value.strftime(CLOCK_FORMAT)


def ends_after_start(start: time, end: time) -> bool:
    return end > start


def calculate_hours_worked(start: time | str, end: time | str) -> Decimal:
    """Hours between two clock times, clamped at zero and rounded to cents."""
    if isinstance(start, str):
        start = parse_clock_time(start)
    if isinstance(end, str):
        end = parse_clock_time(end)
    start_dt = datetime.combine(_REFERENCE_DAY, start.replace(second=0, microsecond=0))
    end_dt = datetime.combine(_REFERENCE_DAY, end.replace(second=0, microsecond=0))
    minutes = int((end_dt - start_dt).total_seconds()) // 60
    if minutes < 0:
        minutes = 0
    return round2(Decimal(minutes) / Decimal(60))
