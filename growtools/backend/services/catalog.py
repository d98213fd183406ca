"""Read-side queries shared by storefront pages and the public JSON API."""
import logging
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from growtools.backend.models.bundle import Bundle, BundleTool
from growtools.backend.models.review import ReviewScreenshot
from growtools.backend.models.tool import Tool

logger = logging.getLogger(__name__)


@dataclass
class CheckoutBundle:
    bundle: Bundle
    tools: list[Tool]


def list_active_tools(db: Session) -> list[Tool]:
    q = select(Tool).where(Tool.is_active.is_(True)).order_by(Tool.sort_order, Tool.name)
    return list(db.execute(q).scalars().all())


def get_active_tool(db: Session, tool_id: str) -> Tool | None:
    tool = db.get(Tool, tool_id)
    if not tool or not tool.is_active:
        return None
    return tool


def get_active_tool_by_slug(db: Session, slug: str) -> Tool | None:
    tool = db.execute(select(Tool).where(Tool.slug == slug)).scalar_one_or_none()
    if not tool or not tool.is_active:
        return None
    return tool


def list_active_bundles(db: Session) -> list[Bundle]:
    q = (
        select(Bundle)
        .where(Bundle.is_active.is_(True))
        .options(selectinload(Bundle.tools).selectinload(BundleTool.tool))
        .order_by(Bundle.sort_order, Bundle.name)
    )
    return list(db.execute(q).scalars().all())


def active_bundle_tools(bundle: Bundle) -> list[Tool]:
    """Tools of a bundle in bundle order, dropping deleted or inactive ones."""
    return [bt.tool for bt in bundle.tools if bt.tool is not None and bt.tool.is_active]


def get_checkout_bundle(db: Session, bundle_id: str) -> CheckoutBundle | None:
    q = (
        select(Bundle)
        .where(Bundle.id == bundle_id)
        .options(selectinload(Bundle.tools).selectinload(BundleTool.tool))
    )
    bundle = db.execute(q).scalar_one_or_none()
    if not bundle or not bundle.is_active:
        return None
    tools = active_bundle_tools(bundle)
    if not tools:
        return None
    return CheckoutBundle(bundle=bundle, tools=tools)


def list_public_screenshots(db: Session) -> list[ReviewScreenshot]:
    """Active screenshots by sort order; empty when the table is not migrated yet."""
    q = (
        select(ReviewScreenshot)
        .where(ReviewScreenshot.is_active.is_(True))
        .order_by(ReviewScreenshot.sort_order, ReviewScreenshot.created_at)
    )
    try:
        return list(db.execute(q).scalars().all())
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning("review screenshots unavailable: %s", str(e).splitlines()[0][:200])
        return []
