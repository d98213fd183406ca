"""Admin: bundle CRUD."""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from growtools.backend.auth import get_current_admin
from growtools.backend.deps import get_db
from growtools.backend.models.bundle import Bundle, BundleTool
from growtools.backend.models.tool import Tool
from growtools.backend.utils.api_errors import error_response, write_error_response
from growtools.backend.utils.api_schema import CamelModel, serialize_bundle

router = APIRouter(dependencies=[Depends(get_current_admin)])
logger = logging.getLogger(__name__)


class BundleBody(CamelModel):
    name: str
    slug: str
    description: str | None = None
    short_description: str | None = None
    features: str | None = None
    target_audience: str | None = None
    icon: str | None = None
    price_monthly: float
    price_six_month: float | None = None
    price_yearly: float | None = None
    is_active: bool | None = True
    is_trending: bool | None = False
    sort_order: int | None = 0
    tool_ids: list[str] = []


def _apply(bundle: Bundle, data: BundleBody) -> None:
    bundle.name = data.name
    bundle.slug = data.slug
    bundle.description = data.description
    bundle.short_description = data.short_description or None
    bundle.features = data.features or None
    bundle.target_audience = data.target_audience or None
    bundle.icon = data.icon or None
    bundle.price_monthly = data.price_monthly
    bundle.price_six_month = data.price_six_month
    bundle.price_yearly = data.price_yearly
    bundle.is_active = True if data.is_active is None else data.is_active
    bundle.is_trending = bool(data.is_trending)
    bundle.sort_order = data.sort_order or 0


def _unique_ids(ids: list[str]) -> list[str]:
    seen: set[str] = set()
    out = []
    for i in ids:
        if i not in seen:
            seen.add(i)
            out.append(i)
    return out


def _set_tools(db: Session, bundle: Bundle, tool_ids: list[str]) -> list[str]:
    """Replace the bundle's tools; list position becomes sort order. Returns unknown ids."""
    ids = _unique_ids(tool_ids)
    known = set(db.execute(select(Tool.id).where(Tool.id.in_(ids))).scalars().all()) if ids else set()
    bundle.tools.clear()
    # flush the deletes before re-inserting rows with the same (bundle_id, tool_id)
    db.flush()
    for idx, tool_id in enumerate(ids):
        if tool_id in known:
            bundle.tools.append(BundleTool(tool_id=tool_id, sort_order=idx))
    return [i for i in ids if i not in known]


def _load(db: Session, bundle_id: str) -> Bundle | None:
    q = (
        select(Bundle)
        .where(Bundle.id == bundle_id)
        .options(selectinload(Bundle.tools).selectinload(BundleTool.tool))
    )
    return db.execute(q).scalar_one_or_none()


def _write_error(db: Session, e: SQLAlchemyError, action: str):
    db.rollback()
    logger.error("Error %s bundle: %s", action, e)
    return write_error_response(
        e, action=action, entity="bundle", conflict_message="A bundle with this slug already exists"
    )


@router.get("")
def list_bundles(db: Session = Depends(get_db)):
    q = (
        select(Bundle)
        .options(selectinload(Bundle.tools).selectinload(BundleTool.tool))
        .order_by(Bundle.sort_order, Bundle.name)
    )
    return {"bundles": [serialize_bundle(b) for b in db.execute(q).scalars().all()]}


@router.post("", status_code=201)
def create_bundle(data: BundleBody, db: Session = Depends(get_db)):
    bundle = Bundle()
    _apply(bundle, data)
    db.add(bundle)
    try:
        db.flush()
        skipped = _set_tools(db, bundle, data.tool_ids)
        db.commit()
    except SQLAlchemyError as e:
        return _write_error(db, e, "create")
    if skipped:
        logger.warning("bundle %s: skipped unknown tool ids %s", bundle.id, skipped)
    return serialize_bundle(_load(db, bundle.id))


@router.put("/{bundle_id}")
def update_bundle(bundle_id: str, data: BundleBody, db: Session = Depends(get_db)):
    bundle = _load(db, bundle_id)
    if not bundle:
        return error_response(404, "Bundle not found")
    _apply(bundle, data)
    try:
        skipped = _set_tools(db, bundle, data.tool_ids)
        db.commit()
    except SQLAlchemyError as e:
        return _write_error(db, e, "update")
    if skipped:
        logger.warning("bundle %s: skipped unknown tool ids %s", bundle_id, skipped)
    return serialize_bundle(_load(db, bundle_id))


@router.delete("/{bundle_id}")
def delete_bundle(bundle_id: str, db: Session = Depends(get_db)):
    bundle = _load(db, bundle_id)
    if not bundle:
        return error_response(404, "Bundle not found")
    db.delete(bundle)
    try:
        db.commit()
    except SQLAlchemyError as e:
        return _write_error(db, e, "delete")
    return {"success": True}
