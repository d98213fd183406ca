"""Re-seal every stored tool cookie blob under the primary key."""
import logging
from dataclasses import dataclass, field

from sqlalchemy import select
from sqlalchemy.orm import Session

from growtools.backend.models.tool import Tool
from growtools.backend.services.cookie_crypto import (
    CookieBlobError,
    CookieKeyring,
    default_keyring,
    rotate_cookie_blob,
)

logger = logging.getLogger(__name__)


@dataclass
class RotationReport:
    rotated: list[str] = field(default_factory=list)
    unchanged: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)


def rotate_tool_cookies(db: Session, keyring: CookieKeyring | None = None, *, dry_run: bool = False) -> RotationReport:
    ring = keyring or default_keyring()
    report = RotationReport()
    tools = db.execute(select(Tool).where(Tool.cookies_encrypted.is_not(None))).scalars().all()
    for tool in tools:
        try:
            new_blob = rotate_cookie_blob(tool.cookies_encrypted, ring)
        except CookieBlobError as e:
            logger.warning("tool %s cookie blob not rotated: %s", tool.slug, e)
            report.failed[tool.id] = str(e)
            continue
        if new_blob == tool.cookies_encrypted:
            report.unchanged.append(tool.id)
            continue
        report.rotated.append(tool.id)
        if not dry_run:
            tool.cookies_encrypted = new_blob
    if dry_run:
        db.rollback()
    else:
        db.commit()
    logger.info(
        "cookie rotation done rotated=%d unchanged=%d failed=%d dry_run=%s",
        len(report.rotated), len(report.unchanged), len(report.failed), dry_run,
    )
    return report
