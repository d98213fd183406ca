"""Admin: manual tool access grants."""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from growtools.backend.auth import SessionUser, get_current_admin
from growtools.backend.deps import get_db
from growtools.backend.models.bundle import Bundle, BundleTool
from growtools.backend.models.tool import Tool
from growtools.backend.models.user import User
from growtools.backend.services.access import grant_tool_access
from growtools.backend.utils.api_errors import error_response
from growtools.backend.utils.api_schema import CamelModel, serialize_subscription

router = APIRouter()
logger = logging.getLogger(__name__)


class GrantAccessBody(CamelModel):
    user_id: str | None = None
    tool_id: str | None = None
    bundle_id: str | None = None
    duration_days: int | None = None


@router.post("/grant-access")
def grant_access(
    data: GrantAccessBody,
    db: Session = Depends(get_db),
    admin: SessionUser = Depends(get_current_admin),
):
    if not data.user_id:
        return error_response(400, "User ID is required")
    if not data.tool_id and not data.bundle_id:
        return error_response(400, "Tool ID or Bundle ID is required")
    if not data.duration_days or data.duration_days < 1:
        return error_response(400, "Valid duration in days is required")
    if not db.get(User, data.user_id):
        return error_response(404, "User not found")

    if data.tool_id:
        tool = db.get(Tool, data.tool_id)
        if not tool:
            return error_response(404, "Tool not found")
        tools = [tool]
        message = "Tool access granted successfully"
    else:
        q = (
            select(Bundle)
            .where(Bundle.id == data.bundle_id)
            .options(selectinload(Bundle.tools).selectinload(BundleTool.tool))
        )
        bundle = db.execute(q).scalar_one_or_none()
        if not bundle:
            return error_response(404, "Bundle not found")
        tools = [bt.tool for bt in bundle.tools if bt.tool is not None]
        message = f"Bundle access granted for {len(tools)} tools"

    subs = []
    for tool in tools:
        sub = grant_tool_access(
            db, user_id=data.user_id, tool=tool, duration_days=data.duration_days, admin_id=admin.id
        )
        db.flush()
        subs.append(sub)
    db.commit()
    logger.info("admin %s granted %d subscription(s) to user %s", admin.id, len(subs), data.user_id)
    return {
        "success": True,
        "message": message,
        "subscriptions": [serialize_subscription(s) for s in subs],
    }
