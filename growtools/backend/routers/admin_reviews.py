"""Admin: review screenshots."""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from growtools.backend.auth import get_current_admin
from growtools.backend.deps import get_db
from growtools.backend.models.review import ReviewScreenshot
from growtools.backend.utils.api_errors import error_response, write_error_response
from growtools.backend.utils.api_schema import CamelModel, serialize_screenshot

router = APIRouter(dependencies=[Depends(get_current_admin)])
logger = logging.getLogger(__name__)


class ScreenshotCreate(CamelModel):
    image_url: str | None = None
    caption: str | None = None
    sort_order: int | None = 0


class ScreenshotUpdate(CamelModel):
    image_url: str | None = None
    caption: str | None = None
    sort_order: int | None = None
    is_active: bool | None = None


@router.get("")
def list_screenshots(db: Session = Depends(get_db)):
    q = select(ReviewScreenshot).order_by(ReviewScreenshot.sort_order, ReviewScreenshot.created_at)
    return {"screenshots": [serialize_screenshot(s) for s in db.execute(q).scalars().all()]}


@router.post("")
def create_screenshot(data: ScreenshotCreate, db: Session = Depends(get_db)):
    if not (data.image_url or "").strip():
        return error_response(400, "Image URL is required")
    shot = ReviewScreenshot(
        image_url=data.image_url.strip(),
        caption=data.caption or None,
        sort_order=data.sort_order or 0,
        is_active=True,
    )
    db.add(shot)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Error creating screenshot: %s", e)
        return write_error_response(e, action="create", entity="screenshot")
    db.refresh(shot)
    return {"success": True, "screenshot": serialize_screenshot(shot)}


@router.put("/{screenshot_id}")
def update_screenshot(screenshot_id: str, data: ScreenshotUpdate, db: Session = Depends(get_db)):
    shot = db.get(ReviewScreenshot, screenshot_id)
    if not shot:
        return error_response(404, "Screenshot not found")
    fields = data.model_dump(exclude_unset=True)
    if "image_url" in fields:
        if not (data.image_url or "").strip():
            return error_response(400, "Image URL is required")
        shot.image_url = data.image_url.strip()
    if "caption" in fields:
        shot.caption = data.caption or None
    if "sort_order" in fields and data.sort_order is not None:
        shot.sort_order = data.sort_order
    if "is_active" in fields and data.is_active is not None:
        shot.is_active = data.is_active
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Error updating screenshot %s: %s", screenshot_id, e)
        return write_error_response(e, action="update", entity="screenshot")
    db.refresh(shot)
    return {"success": True, "screenshot": serialize_screenshot(shot)}


@router.delete("/{screenshot_id}")
def delete_screenshot(screenshot_id: str, db: Session = Depends(get_db)):
    shot = db.get(ReviewScreenshot, screenshot_id)
    if not shot:
        return error_response(404, "Screenshot not found")
    db.delete(shot)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Error deleting screenshot %s: %s", screenshot_id, e)
        return write_error_response(e, action="delete", entity="screenshot")
    return {"success": True}
