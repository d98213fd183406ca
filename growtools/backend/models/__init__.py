"""SQLAlchemy models."""
from growtools.backend.models.user import User
from growtools.backend.models.tool import Tool, ToolSubscription
from growtools.backend.models.bundle import Bundle, BundleTool
from growtools.backend.models.app_setting import AppSetting
from growtools.backend.models.review import ReviewScreenshot
from growtools.backend.models.admin_log import AdminLog

__all__ = [
    "User",
    "Tool",
    "ToolSubscription",
    "Bundle",
    "BundleTool",
    "AppSetting",
    "ReviewScreenshot",
    "AdminLog",
]
