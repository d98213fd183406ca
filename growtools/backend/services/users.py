"""User bootstrap helpers used by scripts."""
import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from growtools.backend.auth import get_password_hash
from growtools.backend.models.user import ROLE_ADMIN, STATUS_ACTIVE, User

logger = logging.getLogger(__name__)


def ensure_admin_user(db: Session, email: str, password: str, name: str | None = "Admin") -> tuple[User, bool]:
    """Create the admin if the email is free, else promote the existing user. Password is never overwritten."""
    email = email.lower().strip()
    user = db.execute(select(User).where(User.email == email)).scalar_one_or_none()
    if user:
        if user.role != ROLE_ADMIN or user.status != STATUS_ACTIVE:
            user.role = ROLE_ADMIN
            user.status = STATUS_ACTIVE
            db.commit()
            logger.info("promoted existing user to admin email=%s", email)
        return user, False
    user = User(email=email, name=name, password_hash=get_password_hash(password), role=ROLE_ADMIN)
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("admin user created email=%s", email)
    return user, True
