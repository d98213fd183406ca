"""Bundles: ordered sets of tools sold together."""
from datetime import datetime
from uuid import uuid4

from sqlalchemy import Column, String, Text, DateTime, Boolean, Integer, Numeric, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from growtools.backend.database import Base


class Bundle(Base):
    __tablename__ = "bundles"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    name = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, nullable=False, index=True)
    description = Column(Text, nullable=True)
    short_description = Column(String(500), nullable=True)
    features = Column(Text, nullable=True)  # comma-separated tool names shown on cards
    target_audience = Column(String(500), nullable=True)
    icon = Column(String(1000), nullable=True)
    price_monthly = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    price_six_month = Column(Numeric(10, 2, asdecimal=False), nullable=True)
    price_yearly = Column(Numeric(10, 2, asdecimal=False), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    is_trending = Column(Boolean, default=False, nullable=False)
    sort_order = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    tools = relationship(
        "BundleTool",
        order_by="BundleTool.sort_order",
        cascade="all, delete-orphan",
        back_populates="bundle",
    )


class BundleTool(Base):
    __tablename__ = "bundle_tools"
    __table_args__ = (UniqueConstraint("bundle_id", "tool_id", name="uq_bundle_tools_bundle_tool"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    bundle_id = Column(String(36), ForeignKey("bundles.id", ondelete="CASCADE"), nullable=False, index=True)
    tool_id = Column(String(36), ForeignKey("tools.id", ondelete="CASCADE"), nullable=False, index=True)
    sort_order = Column(Integer, default=0, nullable=False)

    bundle = relationship("Bundle", back_populates="tools")
    tool = relationship("Tool")
