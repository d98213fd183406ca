"""Customer review screenshots shown on /reviews."""
from datetime import datetime
from uuid import uuid4

from sqlalchemy import Column, String, DateTime, Boolean, Integer

from growtools.backend.database import Base


class ReviewScreenshot(Base):
    __tablename__ = "review_screenshots"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    image_url = Column(String(1000), nullable=False)
    caption = Column(String(500), nullable=True)
    sort_order = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
