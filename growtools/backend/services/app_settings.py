"""Key/value app settings (feature flags, contact links) stored in app_settings.

Reads never raise: a missing table (schema not migrated yet) or an unreachable
database yields None so pages keep rendering.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from growtools.backend.models.app_setting import AppSetting

logger = logging.getLogger(__name__)

AppSettingKey = Literal[
    "meta_pixel_id",
    "meta_pixel_enabled",
    "telegram_link",
    "whatsapp_number",
    "whatsapp_default_message",
]

TRUE_VALUES = ("true", "1", "yes")


@dataclass(frozen=True)
class MetaPixelConfig:
    enabled: bool
    pixel_id: str | None


def get_app_setting_value(db: Session, key: AppSettingKey) -> str | None:
    try:
        row = db.execute(select(AppSetting).where(AppSetting.key == key)).scalar_one_or_none()
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning("app setting %s unavailable: %s", key, str(e).splitlines()[0][:200])
        return None
    return row.value if row else None


def get_boolean_app_setting(db: Session, key: AppSettingKey) -> bool:
    """Exact, case-sensitive match: "True" or "on" are false."""
    return get_app_setting_value(db, key) in TRUE_VALUES


def get_meta_pixel_config(db: Session) -> MetaPixelConfig:
    enabled = get_boolean_app_setting(db, "meta_pixel_enabled")
    pixel_id = get_app_setting_value(db, "meta_pixel_id")
    return MetaPixelConfig(enabled=enabled, pixel_id=pixel_id)


def set_app_setting_value(db: Session, key: AppSettingKey, value: str | None, *, commit: bool = True) -> None:
    row = db.get(AppSetting, key)
    if row:
        row.value = value
        row.updated_at = datetime.utcnow()
    else:
        db.add(AppSetting(key=key, value=value, updated_at=datetime.utcnow()))
    if commit:
        db.commit()


def ensure_app_setting(db: Session, key: AppSettingKey, value: str | None) -> bool:
    """Insert the row only when absent. Returns True when a row was created."""
    if db.get(AppSetting, key) is not None:
        return False
    db.add(AppSetting(key=key, value=value, updated_at=datetime.utcnow()))
    db.commit()
    return True
