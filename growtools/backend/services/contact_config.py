"""Telegram / WhatsApp contact resolution.

Order: app_settings (DB) > environment > built-in fallback.
"""
from dataclasses import dataclass
from urllib.parse import quote

from sqlalchemy.orm import Session

from growtools.backend.config import Settings
from growtools.backend.services.app_settings import get_app_setting_value

DEFAULT_WHATSAPP_NUMBER = "919155313223"
DEFAULT_WHATSAPP_MESSAGE = "Hello! I need help with my subscription."


@dataclass(frozen=True)
class TelegramConfig:
    link: str | None


@dataclass(frozen=True)
class WhatsAppConfig:
    number: str
    default_message: str


def _clean(value: str | None) -> str | None:
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def _first(*values: str | None) -> str | None:
    for v in values:
        cleaned = _clean(v)
        if cleaned:
            return cleaned
    return None


def get_telegram_config(db: Session, settings: Settings) -> TelegramConfig:
    link = _first(get_app_setting_value(db, "telegram_link"), settings.telegram_link)
    return TelegramConfig(link=link)


def get_whatsapp_config(db: Session, settings: Settings) -> WhatsAppConfig:
    number = _first(
        get_app_setting_value(db, "whatsapp_number"),
        settings.whatsapp_number,
        DEFAULT_WHATSAPP_NUMBER,
    )
    message = _first(
        get_app_setting_value(db, "whatsapp_default_message"),
        settings.whatsapp_default_message,
        DEFAULT_WHATSAPP_MESSAGE,
    )
    return WhatsAppConfig(number=number, default_message=message)


def build_whatsapp_url(number: str, message: str | None = None) -> str:
    digits = "".join(ch for ch in str(number) if ch.isdigit()) or DEFAULT_WHATSAPP_NUMBER
    base = f"https://wa.me/{digits}"
    if message and message.strip():
        return f"{base}?text={quote(message.strip(), safe='')}"
    return base
