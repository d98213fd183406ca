"""Checkout and storefront pages, public catalog JSON."""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from growtools.backend.main import app
from growtools.backend.deps import get_db
from growtools.backend.database import get_test_engine, Base
from growtools.backend.auth import create_session_token
from growtools.backend.models import Bundle, BundleTool, Tool

client = TestClient(app)

USER = {"Authorization": f"Bearer {create_session_token('u-1', 'u-1@example.com', 'USER')}"}


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


def _tool(db, slug, *, active=True, sort_order=0):
    t = Tool(
        name=f"{slug.title()} Tool", slug=slug, description=f"{slug} <b>premium</b>", category="AI",
        tool_url=f"https://{slug}.example.com", price_monthly=299, is_active=active, sort_order=sort_order,
    )
    db.add(t)
    db.commit()
    return t


def _bundle(db, tools, *, active=True):
    b = Bundle(name="Power Pack", slug="power-pack", price_monthly=799, price_yearly=7999, is_active=active)
    for i, t in enumerate(tools):
        b.tools.append(BundleTool(tool_id=t.id, sort_order=i))
    db.add(b)
    db.commit()
    return b


@pytest.mark.timeout(10)
def test_tool_checkout(test_db_session, override_get_db):
    active = _tool(test_db_session, "midjourney")
    inactive = _tool(test_db_session, "retired", active=False)
    app.dependency_overrides[get_db] = override_get_db
    try:
        r = client.get(f"/checkout/{active.id}", headers=USER)
        assert r.status_code == 200
        assert "Checkout: Midjourney Tool" in r.text
        assert "₹299" in r.text
        assert "<b>premium</b>" not in r.text

        for tool_id in (inactive.id, "does-not-exist"):
            r = client.get(f"/checkout/{tool_id}", headers=USER)
            assert r.status_code == 404
            assert "404 - Not Found" in r.text
            assert 'id="whatsapp-button"' in r.text
    finally:
        app.dependency_overrides.pop(get_db, None)


@pytest.mark.timeout(10)
def test_bundle_checkout_drops_inactive_tools(test_db_session, override_get_db):
    a = _tool(test_db_session, "alpha")
    b = _tool(test_db_session, "beta", active=False)
    c = _tool(test_db_session, "gamma")
    bundle = _bundle(test_db_session, [c, b, a])
    app.dependency_overrides[get_db] = override_get_db
    try:
        r = client.get(f"/checkout/bundle/{bundle.id}", headers=USER)
        assert r.status_code == 200
        assert "Beta Tool" not in r.text
        assert r.text.index("Gamma Tool") < r.text.index("Alpha Tool")
        assert 'data-plan="yearly"' in r.text
        assert 'data-plan="six_month"' not in r.text

        public = client.get("/api/bundles").json()["bundles"]
        assert public[0]["toolIds"] == [c.id, a.id]
    finally:
        app.dependency_overrides.pop(get_db, None)


@pytest.mark.timeout(10)
def test_bundle_checkout_404_cases(test_db_session, override_get_db):
    a = _tool(test_db_session, "alpha", active=False)
    empty = _bundle(test_db_session, [a])
    app.dependency_overrides[get_db] = override_get_db
    try:
        assert client.get(f"/checkout/bundle/{empty.id}", headers=USER).status_code == 404
        assert client.get("/checkout/bundle/missing", headers=USER).status_code == 404

        a.is_active = True
        empty.is_active = False
        test_db_session.commit()
        assert client.get(f"/checkout/bundle/{empty.id}", headers=USER).status_code == 404
    finally:
        app.dependency_overrides.pop(get_db, None)


@pytest.mark.timeout(10)
def test_catalog_pages_and_json(test_db_session, override_get_db):
    _tool(test_db_session, "zeta", sort_order=2)
    _tool(test_db_session, "eta", sort_order=1)
    _tool(test_db_session, "hidden", active=False)
    app.dependency_overrides[get_db] = override_get_db
    try:
        tools = client.get("/api/tools").json()["tools"]
        assert [t["slug"] for t in tools] == ["eta", "zeta"]
        assert "toolUrl" not in tools[0]

        assert client.get("/api/tools/eta").json()["name"] == "Eta Tool"
        r = client.get("/api/tools/hidden")
        assert r.status_code == 404
        assert r.json() == {"error": "Tool not found"}

        page = client.get("/tools")
        assert page.status_code == 200
        assert page.text.index("Eta Tool") < page.text.index("Zeta Tool")
        assert "Hidden Tool" not in page.text

        assert client.get("/tools/zeta").status_code == 200
        assert client.get("/tools/hidden").status_code == 404
    finally:
        app.dependency_overrides.pop(get_db, None)


def test_login_page_keeps_local_callback_only(override_get_db):
    app.dependency_overrides[get_db] = override_get_db
    try:
        r = client.get("/login", params={"callbackUrl": "/checkout/abc"})
        assert r.status_code == 200
        assert 'window.location.href = "/checkout/abc"' in r.text

        r = client.get("/login", params={"callbackUrl": "https://evil.example.com"})
        assert 'window.location.href = "/dashboard"' in r.text
    finally:
        app.dependency_overrides.pop(get_db, None)


def test_login_callback_cannot_break_out_of_script(override_get_db):
    app.dependency_overrides[get_db] = override_get_db
    try:
        r = client.get(
            "/login",
            params={"callbackUrl": "/</script><script>alert(document.domain)</script>"},
        )
        assert r.status_code == 200
        assert "<script>alert" not in r.text
        assert "</script><script>" not in r.text
        assert "\\u003c/script\\u003e\\u003cscript\\u003ealert" in r.text
    finally:
        app.dependency_overrides.pop(get_db, None)


def test_meta_pixel_id_is_escaped_in_script(test_db_session, override_get_db):
    from growtools.backend.services.app_settings import set_app_setting_value

    set_app_setting_value(test_db_session, "meta_pixel_enabled", "true")
    set_app_setting_value(test_db_session, "meta_pixel_id", "1</script><script>alert(1)//")
    app.dependency_overrides[get_db] = override_get_db
    try:
        r = client.get("/tools")
        assert r.status_code == 200
        assert "fbq('init', \"1\\u003c/script\\u003e\\u003cscript\\u003ealert(1)//\");" in r.text
        assert "<script>alert(1)" not in r.text
    finally:
        app.dependency_overrides.pop(get_db, None)
