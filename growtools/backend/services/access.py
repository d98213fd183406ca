"""Tool access: active subscriptions and manual grants."""
from __future__ import annotations

from datetime import datetime, timedelta

from sqlalchemy import select, or_
from sqlalchemy.orm import Session, selectinload

from growtools.backend.models.admin_log import AdminLog
from growtools.backend.models.tool import Tool, ToolSubscription

STATUS_ACTIVE = "ACTIVE"


def _active_filter(now: datetime):
    return (
        ToolSubscription.status == STATUS_ACTIVE,
        or_(ToolSubscription.end_date.is_(None), ToolSubscription.end_date > now),
    )


def get_active_subscription(db: Session, user_id: str, tool_id: str) -> ToolSubscription | None:
    q = (
        select(ToolSubscription)
        .where(ToolSubscription.user_id == user_id, ToolSubscription.tool_id == tool_id)
        .where(*_active_filter(datetime.utcnow()))
        .order_by(ToolSubscription.end_date.desc())
        .limit(1)
    )
    return db.execute(q).scalars().first()


def list_active_subscriptions(db: Session, user_id: str) -> list[ToolSubscription]:
    q = (
        select(ToolSubscription)
        .where(ToolSubscription.user_id == user_id)
        .where(*_active_filter(datetime.utcnow()))
        .options(selectinload(ToolSubscription.tool))
        .order_by(ToolSubscription.end_date)
    )
    return list(db.execute(q).scalars().all())


def grant_tool_access(
    db: Session,
    *,
    user_id: str,
    tool: Tool,
    duration_days: int,
    admin_id: str | None,
) -> ToolSubscription:
    """Create or extend an ACTIVE subscription. Caller commits."""
    now = datetime.utcnow()
    sub = get_active_subscription(db, user_id, tool.id)
    if sub:
        # no end date means open-ended; leave it that way
        if sub.end_date is not None:
            base = sub.end_date if sub.end_date > now else now
            sub.end_date = base + timedelta(days=duration_days)
    else:
        sub = ToolSubscription(
            user_id=user_id,
            tool_id=tool.id,
            status=STATUS_ACTIVE,
            start_date=now,
            end_date=now + timedelta(days=duration_days),
            granted_by=admin_id,
        )
        db.add(sub)
    db.add(
        AdminLog(
            admin_id=admin_id,
            action="GRANTED_ACCESS",
            tool_id=tool.id,
            details=f"Granted {duration_days} days of {tool.name} to user {user_id}",
        )
    )
    return sub
