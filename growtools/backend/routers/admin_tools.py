"""Admin: tool catalog CRUD and session cookie upload."""
import logging
from datetime import datetime
from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from growtools.backend.auth import SessionUser, get_current_admin
from growtools.backend.deps import get_db
from growtools.backend.models.admin_log import AdminLog
from growtools.backend.models.tool import Tool
from growtools.backend.services.cookie_crypto import encrypt_cookies
from growtools.backend.utils.api_errors import error_response, write_error_response
from growtools.backend.utils.api_schema import CamelModel, serialize_tool

router = APIRouter(dependencies=[Depends(get_current_admin)])
logger = logging.getLogger(__name__)


class ToolBody(CamelModel):
    name: str
    slug: str
    description: str
    short_description: str | None = None
    category: str
    icon: str | None = None
    tool_url: str
    price_monthly: float
    is_active: bool | None = True
    is_featured: bool | None = False
    sort_order: int | None = 0


class CookiesBody(CamelModel):
    cookies: list[dict[str, Any]]
    expiry_date: datetime | None = None


def _apply(tool: Tool, data: ToolBody) -> None:
    tool.name = data.name
    tool.slug = data.slug
    tool.description = data.description
    tool.short_description = data.short_description or None
    tool.category = data.category
    tool.icon = data.icon or None
    tool.tool_url = data.tool_url
    tool.price_monthly = data.price_monthly
    tool.is_active = True if data.is_active is None else data.is_active
    tool.is_featured = bool(data.is_featured)
    tool.sort_order = data.sort_order or 0


def _write_error(db: Session, e: SQLAlchemyError, action: str):
    db.rollback()
    logger.error("Error %s tool: %s", action, e)
    return write_error_response(
        e, action=action, entity="tool", conflict_message="A tool with this slug already exists"
    )


@router.get("")
def list_tools(db: Session = Depends(get_db)):
    q = select(Tool).where(Tool.is_active.is_(True)).order_by(Tool.sort_order)
    tools = db.execute(q).scalars().all()
    return {"tools": [{"id": t.id, "name": t.name, "slug": t.slug, "icon": t.icon} for t in tools]}


@router.post("", status_code=201)
def create_tool(data: ToolBody, db: Session = Depends(get_db)):
    tool = Tool()
    _apply(tool, data)
    db.add(tool)
    try:
        db.commit()
    except SQLAlchemyError as e:
        return _write_error(db, e, "create")
    db.refresh(tool)
    logger.info("tool created id=%s slug=%s", tool.id, tool.slug)
    return serialize_tool(tool)


@router.put("/{tool_id}")
def update_tool(tool_id: str, data: ToolBody, db: Session = Depends(get_db)):
    tool = db.get(Tool, tool_id)
    if not tool:
        return error_response(404, "Tool not found")
    _apply(tool, data)
    try:
        db.commit()
    except SQLAlchemyError as e:
        return _write_error(db, e, "update")
    db.refresh(tool)
    return serialize_tool(tool)


@router.delete("/{tool_id}")
def delete_tool(tool_id: str, db: Session = Depends(get_db)):
    tool = db.get(Tool, tool_id)
    if not tool:
        return error_response(404, "Tool not found")
    db.delete(tool)
    try:
        db.commit()
    except SQLAlchemyError as e:
        return _write_error(db, e, "delete")
    logger.info("tool deleted id=%s", tool_id)
    return {"success": True}


@router.post("/{tool_id}/cookies")
def update_tool_cookies(
    tool_id: str,
    data: CookiesBody,
    db: Session = Depends(get_db),
    admin: SessionUser = Depends(get_current_admin),
):
    tool = db.get(Tool, tool_id)
    if not tool:
        return error_response(404, "Tool not found")
    tool.cookies_encrypted = encrypt_cookies(data.cookies)
    tool.cookies_updated_at = datetime.utcnow()
    tool.cookies_expiry_date = data.expiry_date
    db.add(
        AdminLog(
            admin_id=admin.id,
            action="UPDATED_COOKIES",
            tool_id=tool.id,
            details=f"Updated cookies for {tool.name}",
        )
    )
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Error updating cookies for tool %s: %s", tool_id, e)
        return error_response(500, "Failed to update cookies")
    return {"success": True, "message": "Cookies updated successfully"}
