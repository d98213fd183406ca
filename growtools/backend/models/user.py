"""Site users (customers, testers and admins)."""
from datetime import datetime
from uuid import uuid4

from sqlalchemy import Column, String, DateTime

from growtools.backend.database import Base

ROLE_USER = "USER"
ROLE_TEST_USER = "TEST_USER"
ROLE_ADMIN = "ADMIN"

STATUS_ACTIVE = "ACTIVE"
STATUS_SUSPENDED = "SUSPENDED"


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(16), nullable=False, default=ROLE_USER)
    status = Column(String(16), nullable=False, default=STATUS_ACTIVE)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
