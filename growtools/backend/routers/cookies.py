"""Hands decrypted tool cookies to the browser extension."""
import base64
import json
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from growtools.backend.auth import SessionUser, get_current_account
from growtools.backend.deps import get_db
from growtools.backend.models.tool import Tool
from growtools.backend.services.access import get_active_subscription
from growtools.backend.services.cookie_crypto import decrypt_cookies
from growtools.backend.utils.api_errors import error_response

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/{tool_id}")
def get_tool_cookies(
    tool_id: str,
    db: Session = Depends(get_db),
    user: SessionUser = Depends(get_current_account),
):
    if user.bypasses_subscription:
        tool = db.get(Tool, tool_id)
        if not tool:
            return error_response(404, "Tool not found")
    else:
        sub = get_active_subscription(db, user.id, tool_id)
        if not sub:
            return error_response(403, "No active subscription found for this tool")
        tool = sub.tool

    if not tool.cookies_encrypted:
        return error_response(404, "Cookies not configured for this tool")

    cookies = decrypt_cookies(tool.cookies_encrypted)
    if not cookies:
        logger.warning("tool %s has a cookie blob that yielded no cookies", tool_id)
    # the extension expects base64 encoded JSON
    encoded = base64.b64encode(json.dumps(cookies).encode("utf-8")).decode("ascii")
    return {"cookies": encoded, "url": tool.tool_url}
