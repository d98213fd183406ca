"""Re-encrypt tool cookie blobs under COOKIE_ENCRYPTION_KEY.

Put the old passphrase in COOKIE_ENCRYPTION_PREVIOUS_KEYS, run this, then drop it.
"""
import argparse
import os
import sys

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from growtools.backend.database import get_session_factory  # noqa: E402
from growtools.backend.logging_config import setup_logging  # noqa: E402
from growtools.backend.services.cookie_rotation import rotate_tool_cookies  # noqa: E402


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Re-encrypt tool cookie blobs under the primary key.")
    parser.add_argument("--dry-run", action="store_true")
    args = parser.parse_args(argv)

    setup_logging()
    db = get_session_factory()()
    try:
        report = rotate_tool_cookies(db, dry_run=args.dry_run)
    finally:
        db.close()
    print(f"rotated={len(report.rotated)} unchanged={len(report.unchanged)} failed={len(report.failed)}")
    for tool_id, reason in report.failed.items():
        print(f"- {tool_id}: {reason}")
    return 1 if report.failed else 0


if __name__ == "__main__":
    sys.exit(main())
