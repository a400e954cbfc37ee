from __future__ import annotations

import re
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any

from fastapi import APIRouter, Depends, Query, Response, status
from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel
from sqlalchemy.orm import Session

from worktracker.core.errors import NotFoundError, ValidationError
from worktracker.core.logging import get_logger
from worktracker.core.observability import get_meter, get_tracer
from worktracker.db.session import get_session
from worktracker.domains.work_logs.duration import ends_after_start, format_clock_time, parse_clock_time
from worktracker.domains.work_logs.repository import WorkLogRepository
from worktracker.domains.work_logs.summary import WeeklySummary, build_weekly_summary, week_bounds
from worktracker.models.work_log import WorkLog

router = APIRouter(prefix="/work-logs", tags=["work-logs"])
logger = get_logger(__name__)
tracer = get_tracer(__name__)
summary_counter = get_meter(__name__).create_counter(
    "worklog.summaries", description="Weekly summaries computed"
)

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
NOT_FOUND = "Work log not found"


def parse_iso_date(value: Any) -> date:
    if isinstance(value, str) and DATE_PATTERN.match(value):
        try:
            return date.fromisoformat(value)
        except ValueError:
            pass
    raise ValueError("Invalid date format (YYYY-MM-DD)")


def _clock(value: Any) -> time:
    if not isinstance(value, str):
        raise ValueError("Invalid time format (HH:MM)")
    return parse_clock_time(value)


class WorkLogCreate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    work_date: date = Field(alias="date")
    start_time: time
    end_time: time
    hourly_rate: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)

    @field_validator("work_date", mode="before")
    @classmethod
    def validate_date(cls, value: Any) -> date:
        return parse_iso_date(value)

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def validate_clock(cls, value: Any) -> time:
        return _clock(value)


class WorkLogUpdate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    work_date: date | None = Field(default=None, alias="date")
    start_time: time | None = None
    end_time: time | None = None
    hourly_rate: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)

    @field_validator("work_date", mode="before")
    @classmethod
    def validate_date(cls, value: Any) -> date:
        return parse_iso_date(value)

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def validate_clock(cls, value: Any) -> time:
        return _clock(value)


class WorkLogOut(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    work_date: date = Field(alias="date")
    start_time: time
    end_time: time
    hours_worked: Decimal
    hourly_rate: Decimal | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_serializer("start_time", "end_time")
    def serialize_clock(self, value: time) -> str:
        return format_clock_time(value)

    @field_serializer("hours_worked", "hourly_rate")
    def serialize_decimal(self, value: Decimal | None) -> str | None:
        if value is None:
            return None
        return f"{Decimal(value):.2f}"


class DaySummaryOut(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    date: str
    day_name: str
    total_hours: float


class WeeklySummaryOut(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    start_date: str
    end_date: str
    days: list[DaySummaryOut]
    total_weekly_hours: float
    total_pay: float
    quincena_label: str
    quincena_hours: float
    quincena_pay: float


def get_repository(db: Session = Depends(get_session)) -> WorkLogRepository:
    return WorkLogRepository(db)


def _sanitize(row: WorkLog) -> WorkLogOut:
    return WorkLogOut(
        id=row.id,
        work_date=row.work_date,
        start_time=row.start_time,
        end_time=row.end_time,
        hours_worked=row.hours_worked,
        hourly_rate=row.hourly_rate,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def summary_payload(summary: WeeklySummary) -> WeeklySummaryOut:
    week, quincena = summary.week, summary.quincena
    return WeeklySummaryOut(
        start_date=week.start_date.isoformat(),
        end_date=week.end_date.isoformat(),
        days=[
            DaySummaryOut(date=day.date.isoformat(), day_name=day.day_name.value, total_hours=float(day.total_hours))
            for day in week.days
        ],
        total_weekly_hours=float(week.total_hours),
        total_pay=float(week.total_pay),
        quincena_label=quincena.label.value,
        quincena_hours=float(quincena.total_hours),
        quincena_pay=float(quincena.total_pay),
    )


def _reference_date(value: str | None) -> date | None:
    if value is None:
        return None
    try:
        return parse_iso_date(value)
    except ValueError as exc:
        raise ValidationError(str(exc), field="date") from exc


def _check_time_order(start: time, end: time) -> None:
    if not ends_after_start(start, end):
        raise ValidationError("End time must be after start time", field="endTime")


@router.get("/week", response_model=list[WorkLogOut])
def list_week(
    ref_date: str | None = Query(default=None, alias="date"),
    repo: WorkLogRepository = Depends(get_repository),
) -> list[WorkLogOut]:
    start, end = week_bounds(_reference_date(ref_date) or date.today())
    return [_sanitize(row) for row in repo.query_range(start, end)]


@router.get("/week/summary", response_model=WeeklySummaryOut)
def get_week_summary(
    ref_date: str | None = Query(default=None, alias="date"),
    repo: WorkLogRepository = Depends(get_repository),
) -> WeeklySummaryOut:
    anchor = _reference_date(ref_date)
    with tracer.start_as_current_span("work_logs.weekly_summary"):
        summary = build_weekly_summary(repo.query_range, anchor)
    summary_counter.add(1)
    logger.info(
        "summary_computed",
        week_start=summary.week.start_date.isoformat(),
        hours=str(summary.week.total_hours),
        quincena=summary.quincena.label.value,
    )
    return summary_payload(summary)


@router.get("/{log_id}", response_model=WorkLogOut)
def get_work_log(log_id: int, repo: WorkLogRepository = Depends(get_repository)) -> WorkLogOut:
    row = repo.get(log_id)
    if not row:
        raise NotFoundError(NOT_FOUND)
    return _sanitize(row)


@router.post("", response_model=WorkLogOut, status_code=201)
def create_work_log(payload: WorkLogCreate, repo: WorkLogRepository = Depends(get_repository)) -> WorkLogOut:
    _check_time_order(payload.start_time, payload.end_time)
    row = repo.create(
        work_date=payload.work_date,
        start_time=payload.start_time,
        end_time=payload.end_time,
        hourly_rate=payload.hourly_rate,
    )
    return _sanitize(row)


@router.put("/{log_id}", response_model=WorkLogOut)
def update_work_log(
    log_id: int, payload: WorkLogUpdate, repo: WorkLogRepository = Depends(get_repository)
) -> WorkLogOut:
    changes = payload.model_dump(exclude_unset=True)
    if "start_time" in changes or "end_time" in changes:
        existing = repo.get(log_id)
        if not existing:
            raise NotFoundError(NOT_FOUND)
        _check_time_order(
            changes.get("start_time", existing.start_time),
            changes.get("end_time", existing.end_time),
        )

    row = repo.update(log_id, changes)
    if not row:
        raise NotFoundError(NOT_FOUND)
    return _sanitize(row)


@router.delete("/{log_id}", status_code=204)
def delete_work_log(log_id: int, repo: WorkLogRepository = Depends(get_repository)) -> Response:
    if not repo.get(log_id):
        raise NotFoundError(NOT_FOUND)
    repo.delete(log_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
