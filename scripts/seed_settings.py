"""Insert default app settings without overwriting values an admin already set."""
import os
import sys

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from growtools.backend.database import get_session_factory  # noqa: E402
from growtools.backend.logging_config import setup_logging  # noqa: E402
from growtools.backend.services.app_settings import ensure_app_setting  # noqa: E402

DEFAULTS = (
    ("meta_pixel_enabled", "false"),
    ("meta_pixel_id", None),
)


def main() -> int:
    setup_logging()
    db = get_session_factory()()
    try:
        for key, value in DEFAULTS:
            created = ensure_app_setting(db, key, value)
            print(f"{key}: {'created' if created else 'exists, kept'}")
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
