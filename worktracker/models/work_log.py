from datetime import datetime

from sqlalchemy import Column, Date, DateTime, Integer, Numeric, Time

from worktracker.db.session import Base


class WorkLog(Base):
    __tablename__ = "work_logs"

    id = Column(Integer, primary_key=True, index=True)
    work_date = Column("date", Date, nullable=False, index=True)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    hours_worked = Column(Numeric(precision=5, scale=2), nullable=False)  # derived from start/end
    hourly_rate = Column(Numeric(precision=10, scale=2), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
