"""Admin: analytics and contact settings (app_settings table)."""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from growtools.backend.auth import get_current_admin
from growtools.backend.deps import get_db
from growtools.backend.services.app_settings import get_app_setting_value, set_app_setting_value
from growtools.backend.utils.api_errors import write_error_response
from growtools.backend.utils.api_schema import CamelModel

router = APIRouter(dependencies=[Depends(get_current_admin)])
logger = logging.getLogger(__name__)


class SettingsUpdate(CamelModel):
    meta_pixel_id: str | None = None
    meta_pixel_enabled: bool | None = None
    telegram_link: str | None = None
    whatsapp_number: str | None = None
    whatsapp_default_message: str | None = None


def _blank_to_none(value: str | None) -> str | None:
    value = (value or "").strip()
    return value or None


@router.get("")
def get_admin_settings(db: Session = Depends(get_db)):
    """Raw stored values; env fallbacks are not applied here."""
    return {
        "metaPixelId": get_app_setting_value(db, "meta_pixel_id") or "",
        "metaPixelEnabled": get_app_setting_value(db, "meta_pixel_enabled") == "true",
        "telegramLink": get_app_setting_value(db, "telegram_link") or "",
        "whatsappNumber": get_app_setting_value(db, "whatsapp_number") or "",
        "whatsappDefaultMessage": get_app_setting_value(db, "whatsapp_default_message") or "",
    }


@router.put("")
def put_admin_settings(payload: SettingsUpdate, db: Session = Depends(get_db)):
    raw = payload.model_dump(exclude_unset=True)
    try:
        if "meta_pixel_id" in raw:
            set_app_setting_value(db, "meta_pixel_id", _blank_to_none(payload.meta_pixel_id), commit=False)
        if "meta_pixel_enabled" in raw:
            set_app_setting_value(
                db, "meta_pixel_enabled", "true" if payload.meta_pixel_enabled else "false", commit=False
            )
        for key in ("telegram_link", "whatsapp_number", "whatsapp_default_message"):
            if key in raw:
                set_app_setting_value(db, key, _blank_to_none(raw[key]), commit=False)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Error saving settings: %s", e)
        return write_error_response(e, action="save", entity="settings")
    return {"success": True}
