"""Weekly and quincena aggregation over work-log records.

All aggregation runs on ``Decimal`` with half-up rounding to cents. Records
are fetched through a range-query callable so the reducers stay independent
of the session that backs them.
"""
from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal
from enum import Enum
from typing import Callable, Iterable, List, Optional, Protocol, Tuple

from .duration import round2

ZERO = Decimal("0")


class DayName(str, Enum):
    MON = "Mon"
    TUE = "Tue"
    WED = "Wed"
    THU = "Thu"
    FRI = "Fri"
    SAT = "Sat"
    SUN = "Sun"

    @classmethod
    def for_date(cls, day: date) -> "DayName":
        return list(cls)[day.weekday()]


class QuincenaHalf(str, Enum):
    FIRST = "1st Quincena"
    SECOND = "2nd Quincena"


class LoggedShift(Protocol):
    work_date: date
    hours_worked: Decimal
    hourly_rate: Optional[Decimal]


RangeQuery = Callable[[date, date], Iterable[LoggedShift]]


@dataclass
class DaySummary:
    date: date
    day_name: DayName
    total_hours: Decimal = ZERO


@dataclass
class WeekTotals:
    start_date: date
    end_date: date
    days: List[DaySummary] = field(default_factory=list)
    total_hours: Decimal = ZERO
    total_pay: Decimal = ZERO


@dataclass
class QuincenaTotals:
    label: QuincenaHalf
    start_date: date
    end_date: date
    total_hours: Decimal = ZERO
    total_pay: Decimal = ZERO


@dataclass
class WeeklySummary:
    week: WeekTotals
    quincena: QuincenaTotals


def week_bounds(anchor: date) -> Tuple[date, date]:
    start = anchor - timedelta(days=anchor.weekday())
    end = start + timedelta(days=6)
    return start, end


def quincena_bounds(anchor: date) -> Tuple[QuincenaHalf, date, date]:
    if anchor.day <= 15:
        return QuincenaHalf.FIRST, anchor.replace(day=1), anchor.replace(day=15)
    last_day = calendar.monthrange(anchor.year, anchor.month)[1]
    return QuincenaHalf.SECOND, anchor.replace(day=16), anchor.replace(day=last_day)


def shift_pay(shift: LoggedShift) -> Decimal:
    if shift.hourly_rate is None:
        return ZERO
    return Decimal(shift.hours_worked) * Decimal(shift.hourly_rate)


def _totals(shifts: Iterable[LoggedShift]) -> Tuple[Decimal, Decimal]:
    hours = ZERO
    pay = ZERO
    for shift in shifts:
        hours += Decimal(shift.hours_worked)
        pay += shift_pay(shift)
    return round2(hours), round2(pay)


def aggregate_week(fetch_range: RangeQuery, anchor: date) -> WeekTotals:
    start, end = week_bounds(anchor)
    shifts = list(fetch_range(start, end))

    buckets = {}
    for offset in range(7):
        day = start + timedelta(days=offset)
        buckets[day] = DaySummary(date=day, day_name=DayName.for_date(day))

    for shift in shifts:
        bucket = buckets.get(shift.work_date)
        if bucket is not None:
            bucket.total_hours += Decimal(shift.hours_worked)

    days = list(buckets.values())
    for bucket in days:
        bucket.total_hours = round2(bucket.total_hours)

    total_hours, total_pay = _totals(shifts)
    return WeekTotals(start_date=start, end_date=end, days=days, total_hours=total_hours, total_pay=total_pay)


def aggregate_quincena(fetch_range: RangeQuery, anchor: date) -> QuincenaTotals:
    label, start, end = quincena_bounds(anchor)
    total_hours, total_pay = _totals(fetch_range(start, end))
    return QuincenaTotals(label=label, start_date=start, end_date=end, total_hours=total_hours, total_pay=total_pay)


def build_weekly_summary(fetch_range: RangeQuery, anchor: Optional[date] = None) -> WeeklySummary:
    anchor = anchor or date.today()
    return WeeklySummary(
        week=aggregate_week(fetch_range, anchor),
        quincena=aggregate_quincena(fetch_range, anchor),
    )
