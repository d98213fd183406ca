"""Tool catalog and per-user tool subscriptions."""
from datetime import datetime
from uuid import uuid4

from sqlalchemy import Column, String, Text, DateTime, Boolean, Integer, Numeric, ForeignKey
from sqlalchemy.orm import relationship

from growtools.backend.database import Base


class Tool(Base):
    __tablename__ = "tools"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    name = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, nullable=False, index=True)
    description = Column(Text, nullable=False)
    short_description = Column(String(500), nullable=True)
    category = Column(String(100), nullable=False)
    icon = Column(String(1000), nullable=True)
    tool_url = Column(String(1000), nullable=False)
    price_monthly = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    is_featured = Column(Boolean, default=False, nullable=False)
    sort_order = Column(Integer, default=0, nullable=False)
    # gtc1.<key id>.<fernet token>, see services/cookie_crypto.py
    cookies_encrypted = Column(Text, nullable=True)
    cookies_updated_at = Column(DateTime, nullable=True)
    cookies_expiry_date = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)


class ToolSubscription(Base):
    __tablename__ = "tool_subscriptions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    tool_id = Column(String(36), ForeignKey("tools.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(String(16), nullable=False, default="ACTIVE")  # ACTIVE|EXPIRED|CANCELLED|SUSPENDED
    start_date = Column(DateTime, default=datetime.utcnow, nullable=False)
    end_date = Column(DateTime, nullable=True)
    granted_by = Column(String(36), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    tool = relationship("Tool")
