from __future__ import annotations

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from worktracker.core.errors import ConfigurationError
from worktracker.core.logging import get_logger
from worktracker.models.setting import Setting

logger = get_logger(__name__)

DEFAULT_HOURLY_RATE = "defaultHourlyRate"

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class SettingsRepository:
    """String key/value settings with single-statement upsert."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, key: str) -> str | None:
        row = self.db.query(Setting).filter(Setting.key == key).one_or_none()
        return row.value if row else None

    def set(self, key: str, value: str) -> None:
        dialect = self.db.get_bind().dialect.name
        insert = _UPSERT_DIALECTS.get(dialect)
        if insert is None:
            raise ConfigurationError(f"Settings upsert is not supported on the {dialect} dialect")

        statement = insert(Setting).values(key=key, value=value)
        statement = statement.on_conflict_do_update(
            index_elements=[Setting.key],
            set_={"value": statement.excluded.value},
        )
        self.db.execute(statement)
        self.db.commit()
        logger.info("setting_saved", key=key)
