"""Public contact / analytics configuration for client components.

These endpoints always answer 200: when resolution fails they fall back to
environment values and built-in defaults.
"""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from growtools.backend.config import get_settings
from growtools.backend.deps import get_db
from growtools.backend.services.app_settings import get_meta_pixel_config
from growtools.backend.services.contact_config import (
    DEFAULT_WHATSAPP_NUMBER,
    get_telegram_config,
    get_whatsapp_config,
)

router = APIRouter()
logger = logging.getLogger(__name__)

FALLBACK_WHATSAPP_MESSAGE = "Hello! I need help."


@router.get("/telegram")
def telegram_config(db: Session = Depends(get_db)):
    s = get_settings()
    try:
        cfg = get_telegram_config(db, s)
    except Exception:
        logger.exception("telegram config resolution failed")
        return {"link": (s.telegram_link or "").strip() or None}
    return {"link": cfg.link}


@router.get("/whatsapp")
def whatsapp_config(db: Session = Depends(get_db)):
    s = get_settings()
    try:
        cfg = get_whatsapp_config(db, s)
    except Exception:
        logger.exception("whatsapp config resolution failed")
        return {
            "number": (s.whatsapp_number or "").strip() or DEFAULT_WHATSAPP_NUMBER,
            "defaultMessage": FALLBACK_WHATSAPP_MESSAGE,
        }
    return {"number": cfg.number, "defaultMessage": cfg.default_message}


@router.get("/meta-pixel")
def meta_pixel_config(db: Session = Depends(get_db)):
    try:
        cfg = get_meta_pixel_config(db)
    except Exception:
        logger.exception("meta pixel config resolution failed")
        return {"enabled": False, "pixelId": None}
    return {"enabled": cfg.enabled, "pixelId": cfg.pixel_id}
