import json
from contextlib import contextmanager
from datetime import date
from decimal import Decimal

from worktracker import cli
from worktracker.domains.settings.repository import SettingsRepository
from worktracker.domains.work_logs.repository import WorkLogRepository
from worktracker.seed.seed_data import seed


def test_seed_populates_empty_store_once(db_session):
    assert seed(db_session, today=date(2024, 3, 6)) is True
    assert seed(db_session, today=date(2024, 3, 6)) is False

    rows = WorkLogRepository(db_session).query_range(date(2024, 3, 4), date(2024, 3, 10))
    assert [row.work_date for row in rows] == [date(2024, 3, 4), date(2024, 3, 5), date(2024, 3, 6)]
    assert [row.hours_worked for row in rows] == [Decimal("8.00"), Decimal("9.00"), Decimal("6.00")]
    assert SettingsRepository(db_session).get("defaultHourlyRate") == "3500"


def test_cli_seed_then_summary(capsys, monkeypatch, session_factory):
    @contextmanager
    def testing_scope():
        db = session_factory()
        try:
            yield db
            db.commit()
        finally:
            db.close()

    monkeypatch.setattr(cli, "session_scope", testing_scope)

    cli.main(["seed"])
    assert "Seeded demo data" in capsys.readouterr().out

    cli.main(["summary", "--date", date.today().isoformat()])
    summary = json.loads(capsys.readouterr().out)

    assert summary["totalWeeklyHours"] == 23.0
    assert summary["totalPay"] == 460.0
    assert len(summary["days"]) == 7
