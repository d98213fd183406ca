"""Ensure the default admin account exists (ADMIN_DEFAULT_EMAIL / ADMIN_DEFAULT_PASSWORD)."""
import os
import sys

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from growtools.backend.config import get_settings  # noqa: E402
from growtools.backend.database import get_session_factory  # noqa: E402
from growtools.backend.logging_config import setup_logging  # noqa: E402
from growtools.backend.services.users import ensure_admin_user  # noqa: E402


def main() -> int:
    setup_logging()
    s = get_settings()
    db = get_session_factory()()
    try:
        user, created = ensure_admin_user(db, s.admin_default_email, s.admin_default_password)
    finally:
        db.close()
    if created:
        print(f"Admin created: {user.email}")
        if s.admin_default_password == "changeme":
            print("WARNING: default admin password in use, change it after first login.")
    else:
        print(f"Admin already exists: {user.email}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
