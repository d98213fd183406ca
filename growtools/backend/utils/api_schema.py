"""JSON shapes shared by the API: camelCase request models and record serializers."""
from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from growtools.backend.models.bundle import Bundle
from growtools.backend.models.review import ReviewScreenshot
from growtools.backend.models.tool import Tool, ToolSubscription
from growtools.backend.models.user import User


class CamelModel(BaseModel):
    """Accepts camelCase (web clients) and snake_case field names."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _iso(dt: datetime | None) -> str | None:
    return dt.isoformat() if dt else None


def serialize_tool(t: Tool) -> dict[str, Any]:
    return {
        "id": t.id,
        "name": t.name,
        "slug": t.slug,
        "description": t.description,
        "shortDescription": t.short_description,
        "category": t.category,
        "icon": t.icon,
        "toolUrl": t.tool_url,
        "priceMonthly": t.price_monthly,
        "isActive": t.is_active,
        "isFeatured": t.is_featured,
        "sortOrder": t.sort_order,
        "hasCookies": bool(t.cookies_encrypted),
        "cookiesUpdatedAt": _iso(t.cookies_updated_at),
        "cookiesExpiryDate": _iso(t.cookies_expiry_date),
        "createdAt": _iso(t.created_at),
        "updatedAt": _iso(t.updated_at),
    }


def serialize_bundle(b: Bundle, tools: list[Tool] | None = None) -> dict[str, Any]:
    """tools: explicit tool list (e.g. active only); defaults to every linked tool."""
    if tools is None:
        tools = [bt.tool for bt in b.tools if bt.tool is not None]
    return {
        "id": b.id,
        "name": b.name,
        "slug": b.slug,
        "description": b.description,
        "shortDescription": b.short_description,
        "features": b.features,
        "targetAudience": b.target_audience,
        "icon": b.icon,
        "priceMonthly": b.price_monthly,
        "priceSixMonth": b.price_six_month,
        "priceYearly": b.price_yearly,
        "isActive": b.is_active,
        "isTrending": b.is_trending,
        "sortOrder": b.sort_order,
        "toolIds": [t.id for t in tools],
        "tools": [{"id": t.id, "name": t.name, "slug": t.slug, "icon": t.icon} for t in tools],
        "createdAt": _iso(b.created_at),
        "updatedAt": _iso(b.updated_at),
    }


def serialize_screenshot(s: ReviewScreenshot) -> dict[str, Any]:
    return {
        "id": s.id,
        "imageUrl": s.image_url,
        "caption": s.caption,
        "sortOrder": s.sort_order,
        "isActive": s.is_active,
        "createdAt": _iso(s.created_at),
        "updatedAt": _iso(s.updated_at),
    }


def serialize_subscription(sub: ToolSubscription) -> dict[str, Any]:
    return {
        "id": sub.id,
        "userId": sub.user_id,
        "toolId": sub.tool_id,
        "status": sub.status,
        "startDate": _iso(sub.start_date),
        "endDate": _iso(sub.end_date),
    }


def serialize_user(u: User, active_subscriptions: int = 0) -> dict[str, Any]:
    return {
        "id": u.id,
        "email": u.email,
        "name": u.name,
        "role": u.role,
        "status": u.status,
        "activeSubscriptions": active_subscriptions,
        "createdAt": _iso(u.created_at),
    }
