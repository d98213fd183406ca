"""Per-request snapshot of the settings pages need (contacts, analytics)."""
from dataclasses import dataclass

from fastapi import Depends
from sqlalchemy.orm import Session

from growtools.backend.config import Settings, get_settings
from growtools.backend.deps import get_db
from growtools.backend.services.app_settings import MetaPixelConfig, get_meta_pixel_config
from growtools.backend.services.contact_config import (
    TelegramConfig,
    WhatsAppConfig,
    build_whatsapp_url,
    get_telegram_config,
    get_whatsapp_config,
)


@dataclass(frozen=True)
class SiteConfig:
    telegram: TelegramConfig
    whatsapp: WhatsAppConfig
    meta_pixel: MetaPixelConfig

    @property
    def whatsapp_url(self) -> str:
        return build_whatsapp_url(self.whatsapp.number, self.whatsapp.default_message)

    @property
    def meta_pixel_id(self) -> str | None:
        """Pixel id to embed, or None when tracking is off or no id is set."""
        if not self.meta_pixel.enabled:
            return None
        pixel_id = (self.meta_pixel.pixel_id or "").strip()
        return pixel_id or None


def load_site_config(db: Session, settings: Settings) -> SiteConfig:
    return SiteConfig(
        telegram=get_telegram_config(db, settings),
        whatsapp=get_whatsapp_config(db, settings),
        meta_pixel=get_meta_pixel_config(db),
    )


def get_site_config(db: Session = Depends(get_db)) -> SiteConfig:
    return load_site_config(db, get_settings())
