"""Admin user bootstrap and cookie key rotation over stored tools."""
import pytest
from sqlalchemy import select
from sqlalchemy.orm import sessionmaker

from growtools.backend.database import get_test_engine, Base
from growtools.backend.auth import verify_password
from growtools.backend.models import Tool, User
from growtools.backend.services.cookie_crypto import CookieKeyring, encrypt_cookies, key_id, open_cookie_blob
from growtools.backend.services.cookie_rotation import rotate_tool_cookies
from growtools.backend.services.users import ensure_admin_user

OLD = CookieKeyring(primary="old-key")
ROTATING = CookieKeyring(primary="new-key", previous=("old-key",))


@pytest.fixture
def test_db_session():
    engine = get_test_engine()
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine)
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _tool(db, slug, blob):
    db.add(Tool(
        name=slug, slug=slug, description="d", category="c", tool_url="https://example.com",
        price_monthly=1, cookies_encrypted=blob,
    ))
    db.commit()


def test_ensure_admin_creates_once(test_db_session):
    user, created = ensure_admin_user(test_db_session, "Admin@GrowTools.app", "s3cret-pass")
    assert created is True
    assert user.email == "admin@growtools.app"
    assert user.role == "ADMIN"
    assert verify_password("s3cret-pass", user.password_hash)

    again, created = ensure_admin_user(test_db_session, "admin@growtools.app", "different")
    assert created is False
    assert again.id == user.id
    assert verify_password("s3cret-pass", again.password_hash)


def test_ensure_admin_promotes_existing_user(test_db_session):
    test_db_session.add(User(email="ops@example.com", password_hash="x", role="USER", status="SUSPENDED"))
    test_db_session.commit()
    user, created = ensure_admin_user(test_db_session, "ops@example.com", "ignored")
    assert created is False
    assert (user.role, user.status) == ("ADMIN", "ACTIVE")


def test_rotate_tool_cookies(test_db_session):
    cookies = [{"name": "sid", "value": "1"}]
    _tool(test_db_session, "old", encrypt_cookies(cookies, OLD))
    _tool(test_db_session, "current", encrypt_cookies(cookies, CookieKeyring(primary="new-key")))
    _tool(test_db_session, "broken", "gtc1.00000000.junk")
    _tool(test_db_session, "empty", None)

    report = rotate_tool_cookies(test_db_session, ROTATING)
    assert len(report.rotated) == 1
    assert len(report.unchanged) == 1
    assert len(report.failed) == 1

    blobs = {t.slug: t.cookies_encrypted for t in test_db_session.execute(select(Tool)).scalars()}
    assert blobs["old"].split(".")[1] == key_id("new-key")
    assert open_cookie_blob(blobs["old"], CookieKeyring(primary="new-key")) == cookies
    assert blobs["broken"] == "gtc1.00000000.junk"


def test_rotate_dry_run_changes_nothing(test_db_session):
    blob = encrypt_cookies([{"name": "a"}], OLD)
    _tool(test_db_session, "old", blob)
    report = rotate_tool_cookies(test_db_session, ROTATING, dry_run=True)
    assert len(report.rotated) == 1
    test_db_session.expire_all()
    assert test_db_session.execute(select(Tool)).scalar_one().cookies_encrypted == blob
