"""Model for global app settings (key-value)."""
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Text

from growtools.backend.database import Base


class AppSetting(Base):
    __tablename__ = "app_settings"

    key = Column(String(100), primary_key=True)
    value = Column(Text, nullable=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
