from datetime import date, time, timedelta
from decimal import Decimal

from sqlalchemy.orm import Session

from worktracker.core.logging import get_logger
from worktracker.domains.settings.repository import DEFAULT_HOURLY_RATE, SettingsRepository
from worktracker.domains.work_logs.repository import WorkLogRepository
from worktracker.domains.work_logs.summary import week_bounds

logger = get_logger(__name__)

DEMO_SHIFTS = [
    (0, time(9, 0), time(17, 0)),
    (1, time(9, 0), time(18, 0)),
    (2, time(10, 0), time(16, 0)),
]


def seed(session: Session, today: date | None = None) -> bool:
    """Populate an empty store with a default rate and three shifts this week."""
    logs = WorkLogRepository(session)
    if logs.count():
        return False

    logger.info("seeding_database")
    SettingsRepository(session).set(DEFAULT_HOURLY_RATE, "3500")

    monday, _ = week_bounds(today or date.today())
    for offset, start, end in DEMO_SHIFTS:
        logs.create(
            work_date=monday + timedelta(days=offset),
            start_time=start,
            end_time=end,
            hourly_rate=Decimal("20"),
        )
    return True
