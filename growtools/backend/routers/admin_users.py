"""Admin: user listing and suspension."""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from growtools.backend.auth import SessionUser, get_current_admin
from growtools.backend.deps import get_db
from growtools.backend.models.admin_log import AdminLog
from growtools.backend.models.tool import ToolSubscription
from growtools.backend.models.user import STATUS_ACTIVE, STATUS_SUSPENDED, User
from growtools.backend.utils.api_errors import error_response
from growtools.backend.utils.api_schema import serialize_user

router = APIRouter()
logger = logging.getLogger(__name__)

SUBSCRIPTION_SUSPENDED = "SUSPENDED"


@router.get("")
def list_users(db: Session = Depends(get_db), admin: SessionUser = Depends(get_current_admin)):
    counts = dict(
        db.execute(
            select(ToolSubscription.user_id, func.count())
            .where(ToolSubscription.status == STATUS_ACTIVE)
            .group_by(ToolSubscription.user_id)
        ).all()
    )
    users = db.execute(select(User).order_by(User.created_at.desc())).scalars().all()
    return {"users": [serialize_user(u, counts.get(u.id, 0)) for u in users]}


@router.post("/{user_id}/suspend")
def suspend_user(user_id: str, db: Session = Depends(get_db), admin: SessionUser = Depends(get_current_admin)):
    """Blocks sign-in and cookie access, and parks every ACTIVE subscription as SUSPENDED."""
    user = db.get(User, user_id)
    if not user:
        return error_response(404, "User not found")
    if user.id == admin.id:
        return error_response(400, "You cannot suspend your own account")
    user.status = STATUS_SUSPENDED
    parked = db.execute(
        update(ToolSubscription)
        .where(ToolSubscription.user_id == user_id, ToolSubscription.status == STATUS_ACTIVE)
        .values(status=SUBSCRIPTION_SUSPENDED)
    ).rowcount
    db.add(
        AdminLog(
            admin_id=admin.id,
            action="SUSPENDED_USER",
            details=f"Suspended user {user.email}; {parked} subscription(s) suspended",
        )
    )
    db.commit()
    logger.info("admin %s suspended user %s (%d subscriptions)", admin.id, user_id, parked)
    return {"success": True, "message": "User suspended successfully"}


@router.post("/{user_id}/activate")
def activate_user(user_id: str, db: Session = Depends(get_db), admin: SessionUser = Depends(get_current_admin)):
    """Lets the user sign in again; suspended subscriptions stay parked until access is re-granted."""
    user = db.get(User, user_id)
    if not user:
        return error_response(404, "User not found")
    user.status = STATUS_ACTIVE
    db.add(AdminLog(admin_id=admin.id, action="ACTIVATED_USER", details=f"Activated user {user.email}"))
    db.commit()
    return {"success": True, "message": "User activated successfully"}
