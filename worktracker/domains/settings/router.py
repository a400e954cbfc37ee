from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from worktracker.core.errors import NotFoundError
from worktracker.db.session import get_session
from worktracker.domains.settings.repository import SettingsRepository

router = APIRouter(prefix="/settings", tags=["settings"])


class SettingValue(BaseModel):
    value: str


class SettingOut(BaseModel):
    key: str
    value: str


@router.get("/{key}", response_model=SettingOut)
def get_setting(key: str, db: Session = Depends(get_session)) -> SettingOut:
    value = SettingsRepository(db).get(key)
    if value is None:
        raise NotFoundError("Setting not found")
    return SettingOut(key=key, value=value)


@router.put("/{key}", response_model=SettingOut)
def put_setting(key: str, payload: SettingValue, db: Session = Depends(get_session)) -> SettingOut:
    SettingsRepository(db).set(key, payload.value)
    return SettingOut(key=key, value=payload.value)
