from __future__ import annotations

import argparse
from datetime import date

from worktracker.core.config import settings
from worktracker.core.logging import configure_logging
from worktracker.db.session import create_schema, session_scope
from worktracker.domains.work_logs.repository import WorkLogRepository
from worktracker.domains.work_logs.router import summary_payload
from worktracker.domains.work_logs.summary import build_weekly_summary
from worktracker.seed.seed_data import seed


def parse_date(value: str) -> date:
    return date.fromisoformat(value)


def cmd_init_db(args: argparse.Namespace) -> None:
    create_schema()
    print("Database schema ready")


def cmd_seed(args: argparse.Namespace) -> None:
    with session_scope() as session:
        created = seed(session)
    print("Seeded demo data" if created else "Store not empty, nothing seeded")


def cmd_summary(args: argparse.Namespace) -> None:
    with session_scope() as session:
        summary = build_weekly_summary(WorkLogRepository(session).query_range, args.date)
    print(summary_payload(summary).model_dump_json(by_alias=True, indent=2))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Work hours tracker utilities")
    sub = parser.add_subparsers(dest="command", required=True)

    init_db = sub.add_parser("init-db", help="Create database tables")
    init_db.set_defaults(func=cmd_init_db)

    seed_cmd = sub.add_parser("seed", help="Seed demo shifts into an empty store")
    seed_cmd.set_defaults(func=cmd_seed)

    summary = sub.add_parser("summary", help="Print the weekly and quincena summary")
    summary.add_argument("--date", type=parse_date, default=None, help="Any date in the week (YYYY-MM-DD)")
    summary.set_defaults(func=cmd_summary)

    return parser


def main(argv: list[str] | None = None) -> None:
    configure_logging(settings.log_level)
    parser = build_parser()
    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
