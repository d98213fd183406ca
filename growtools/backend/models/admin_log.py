"""Audit trail of admin actions."""
from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, Text

from growtools.backend.database import Base


class AdminLog(Base):
    __tablename__ = "admin_logs"

    id = Column(Integer, primary_key=True, index=True)
    admin_id = Column(String(36), nullable=True, index=True)
    action = Column(String(64), nullable=False)  # UPDATED_COOKIES, GRANTED_ACCESS, SUSPENDED_USER, ACTIVATED_USER
    tool_id = Column(String(36), nullable=True, index=True)
    details = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
