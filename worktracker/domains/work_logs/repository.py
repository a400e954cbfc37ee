from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Mapping

from sqlalchemy.orm import Session

from worktracker.core.logging import get_logger
from worktracker.domains.work_logs.duration import calculate_hours_worked
from worktracker.models.work_log import WorkLog

logger = get_logger(__name__)

UPDATABLE_FIELDS = frozenset({"work_date", "start_time", "end_time", "hourly_rate"})


class WorkLogRepository:
    """Work-log persistence. ``hours_worked`` is derived here on every write."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def create(
        self,
        *,
        work_date: date,
        start_time: time,
        end_time: time,
        hourly_rate: Decimal | None = None,
    ) -> WorkLog:
        row = WorkLog(
            work_date=work_date,
            start_time=start_time,
            end_time=end_time,
            hours_worked=calculate_hours_worked(start_time, end_time),
            hourly_rate=hourly_rate,
        )
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        logger.info("work_log_created", id=row.id, date=row.work_date.isoformat(), hours=str(row.hours_worked))
        return row

    def get(self, log_id: int) -> WorkLog | None:
        return self.db.query(WorkLog).filter(WorkLog.id == log_id).one_or_none()

    def update(self, log_id: int, changes: Mapping[str, Any]) -> WorkLog | None:
        row = self.get(log_id)
        if not row:
            return None

        for name, value in changes.items():
            if name in UPDATABLE_FIELDS:
                setattr(row, name, value)
        # recomputed on every update, whichever fields changed
        row.hours_worked = calculate_hours_worked(row.start_time, row.end_time)
        row.updated_at = datetime.utcnow()

        self.db.commit()
        self.db.refresh(row)
        logger.info("work_log_updated", id=row.id, fields=sorted(set(changes) & UPDATABLE_FIELDS))
        return row

    def delete(self, log_id: int) -> None:
        self.db.query(WorkLog).filter(WorkLog.id == log_id).delete()
        self.db.commit()
        logger.info("work_log_deleted", id=log_id)

    def query_range(self, start_date: date, end_date: date) -> list[WorkLog]:
        return (
            self.db.query(WorkLog)
            .filter(WorkLog.work_date >= start_date, WorkLog.work_date <= end_date)
            .order_by(WorkLog.work_date.asc(), WorkLog.start_time.asc(), WorkLog.id.asc())
            .all()
        )

    def count(self) -> int:
        return self.db.query(WorkLog).count()
