"""Admin settings read/write and their effect on rendered pages."""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from growtools.backend.main import app
from growtools.backend.config import Settings
from growtools.backend.deps import get_db
from growtools.backend.database import get_test_engine, Base
from growtools.backend.auth import create_session_token
from growtools.backend.services import site_config
from growtools.backend.services.app_settings import get_app_setting_value

client = TestClient(app)

ADMIN = {"Authorization": f"Bearer {create_session_token('admin-1', 'admin@example.com', 'ADMIN')}"}


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


@pytest.fixture
def override_get_db(test_db_session):
    def _get_db():
        try:
            yield test_db_session
        finally:
            pass
    return _get_db


@pytest.mark.timeout(10)
def test_settings_round_trip(test_db_session, override_get_db):
    app.dependency_overrides[get_db] = override_get_db
    try:
        r = client.get("/api/admin/settings", headers=ADMIN)
        assert r.json() == {
            "metaPixelId": "",
            "metaPixelEnabled": False,
            "telegramLink": "",
            "whatsappNumber": "",
            "whatsappDefaultMessage": "",
        }

        r = client.put(
            "/api/admin/settings",
            json={"metaPixelId": " 998877 ", "metaPixelEnabled": True, "telegramLink": "https://t.me/gt"},
            headers=ADMIN,
        )
        assert r.json() == {"success": True}
        assert get_app_setting_value(test_db_session, "meta_pixel_enabled") == "true"
        assert get_app_setting_value(test_db_session, "meta_pixel_id") == "998877"

        # only provided keys change; blanks are stored as null
        client.put("/api/admin/settings", json={"telegramLink": "  "}, headers=ADMIN)
        assert get_app_setting_value(test_db_session, "telegram_link") is None
        assert get_app_setting_value(test_db_session, "meta_pixel_id") == "998877"

        client.put("/api/admin/settings", json={"metaPixelEnabled": False}, headers=ADMIN)
        assert client.get("/api/admin/settings", headers=ADMIN).json()["metaPixelEnabled"] is False
    finally:
        app.dependency_overrides.pop(get_db, None)


@pytest.mark.timeout(10)
def test_pages_follow_settings(override_get_db, monkeypatch):
    monkeypatch.setattr(site_config, "get_settings", lambda: Settings(telegram_link=None, whatsapp_number=None))
    app.dependency_overrides[get_db] = override_get_db
    try:
        page = client.get("/tools").text
        assert "fbq('init'" not in page
        assert 'id="telegram-button"' not in page
        assert "https://wa.me/919155313223?text=Hello%21%20I%20need%20help%20with%20my%20subscription." in page

        client.put(
            "/api/admin/settings",
            json={"metaPixelId": "998877", "metaPixelEnabled": True, "telegramLink": "https://t.me/gt"},
            headers=ADMIN,
        )
        page = client.get("/tools").text
        assert "fbq('init', \"998877\")" in page
        assert 'href="https://t.me/gt"' in page

        # id present but tracking disabled
        client.put("/api/admin/settings", json={"metaPixelEnabled": False}, headers=ADMIN)
        assert "fbq('init'" not in client.get("/tools").text
    finally:
        app.dependency_overrides.pop(get_db, None)


def test_settings_require_admin():
    assert client.put("/api/admin/settings", json={}).status_code == 401


@pytest.mark.timeout(10)
def test_missing_schema_is_500_with_hint():
    engine = get_test_engine()
    db = sessionmaker(bind=engine)()

    def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db
    try:
        r = client.put("/api/admin/settings", json={"telegramLink": "https://t.me/growtools"}, headers=ADMIN)
        assert r.status_code == 500
        assert r.json()["error"] == "Database schema needs to be updated. Please run: alembic upgrade head"
    finally:
        app.dependency_overrides.pop(get_db, None)
        db.close()
