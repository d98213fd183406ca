"""Public catalog JSON: tools, bundles, review screenshots."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from growtools.backend.deps import get_db
from growtools.backend.services import catalog
from growtools.backend.utils.api_errors import error_response
from growtools.backend.utils.api_schema import serialize_bundle, serialize_screenshot, serialize_tool

router = APIRouter()

_PUBLIC_TOOL_FIELDS = (
    "id", "name", "slug", "description", "shortDescription", "category",
    "icon", "priceMonthly", "isFeatured", "sortOrder",
)


def _public_tool(tool) -> dict:
    data = serialize_tool(tool)
    return {k: data[k] for k in _PUBLIC_TOOL_FIELDS}


@router.get("/tools")
def list_tools(db: Session = Depends(get_db)):
    return {"tools": [_public_tool(t) for t in catalog.list_active_tools(db)]}


@router.get("/tools/{slug}")
def get_tool(slug: str, db: Session = Depends(get_db)):
    tool = catalog.get_active_tool_by_slug(db, slug)
    if not tool:
        return error_response(404, "Tool not found")
    return _public_tool(tool)


@router.get("/bundles")
def list_bundles(db: Session = Depends(get_db)):
    return {
        "bundles": [
            serialize_bundle(b, catalog.active_bundle_tools(b)) for b in catalog.list_active_bundles(db)
        ]
    }


@router.get("/reviews")
def list_reviews(db: Session = Depends(get_db)):
    return {"screenshots": [serialize_screenshot(s) for s in catalog.list_public_screenshots(db)]}
