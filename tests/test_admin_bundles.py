"""Admin bundle CRUD: ordered tool lists and slug conflicts."""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import select
from sqlalchemy.orm import sessionmaker

from growtools.backend.main import app
from growtools.backend.deps import get_db
from growtools.backend.database import get_test_engine, Base
from growtools.backend.auth import create_session_token
from growtools.backend.models import BundleTool, Tool

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


def _tools(db, *slugs):
    out = []
    for i, slug in enumerate(slugs):
        t = Tool(
            name=slug.title(), slug=slug, description=f"{slug} access", category="AI",
            tool_url=f"https://{slug}.example.com", price_monthly=100 + i, sort_order=i,
        )
        db.add(t)
        out.append(t)
    db.commit()
    return [t.id for t in out]


@pytest.mark.timeout(10)
def test_create_bundle_keeps_tool_order(test_db_session, override_get_db):
    a, b, c = _tools(test_db_session, "alpha", "beta", "gamma")
    app.dependency_overrides[get_db] = override_get_db
    try:
        r = client.post(
            "/api/admin/bundles",
            json={"name": "Creator Pack", "slug": "creator-pack", "priceMonthly": 999, "toolIds": [c, a, b]},
            headers=ADMIN,
        )
        assert r.status_code == 201
        data = r.json()
        assert data["toolIds"] == [c, a, b]
        assert [t["slug"] for t in data["tools"]] == ["gamma", "alpha", "beta"]

        rows = test_db_session.execute(
            select(BundleTool).where(BundleTool.bundle_id == data["id"]).order_by(BundleTool.sort_order)
        ).scalars().all()
        assert [(r.tool_id, r.sort_order) for r in rows] == [(c, 0), (a, 1), (b, 2)]
    finally:
        app.dependency_overrides.pop(get_db, None)


@pytest.mark.timeout(10)
def test_update_bundle_replaces_tools(test_db_session, override_get_db):
    a, b, c = _tools(test_db_session, "alpha", "beta", "gamma")
    app.dependency_overrides[get_db] = override_get_db
    try:
        body = {"name": "Pack", "slug": "pack", "priceMonthly": 500, "toolIds": [a, b]}
        bundle_id = client.post("/api/admin/bundles", json=body, headers=ADMIN).json()["id"]

        r = client.put(
            f"/api/admin/bundles/{bundle_id}",
            json={**body, "priceYearly": 4999, "isTrending": True, "toolIds": [b, c, "missing-id"]},
            headers=ADMIN,
        )
        assert r.status_code == 200
        data = r.json()
        assert data["toolIds"] == [b, c]
        assert data["priceYearly"] == 4999
        assert data["isTrending"] is True

        listed = client.get("/api/admin/bundles", headers=ADMIN).json()["bundles"]
        assert [x["id"] for x in listed] == [bundle_id]

        assert client.delete(f"/api/admin/bundles/{bundle_id}", headers=ADMIN).json() == {"success": True}
        assert test_db_session.execute(select(BundleTool)).scalars().all() == []
        assert client.put(f"/api/admin/bundles/{bundle_id}", json=body, headers=ADMIN).status_code == 404
    finally:
        app.dependency_overrides.pop(get_db, None)


@pytest.mark.timeout(10)
def test_duplicate_bundle_slug_is_400(test_db_session, override_get_db):
    (a,) = _tools(test_db_session, "alpha")
    app.dependency_overrides[get_db] = override_get_db
    try:
        body = {"name": "Pack", "slug": "pack", "priceMonthly": 500, "toolIds": [a]}
        assert client.post("/api/admin/bundles", json=body, headers=ADMIN).status_code == 201
        r = client.post("/api/admin/bundles", json=body, headers=ADMIN)
        assert r.status_code == 400
        assert r.json() == {"error": "A bundle with this slug already exists"}
    finally:
        app.dependency_overrides.pop(get_db, None)


def test_bundles_require_admin():
    assert client.get("/api/admin/bundles").status_code == 401


@pytest.mark.timeout(10)
def test_missing_schema_is_500_with_hint():
    engine = get_test_engine()
    db = sessionmaker(bind=engine)()

    def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db
    try:
        r = client.post(
            "/api/admin/bundles",
            json={"name": "Creator Pack", "slug": "creator-pack", "priceMonthly": 999},
            headers=ADMIN,
        )
        assert r.status_code == 500
        assert r.json()["error"] == "Database schema needs to be updated. Please run: alembic upgrade head"
    finally:
        app.dependency_overrides.pop(get_db, None)
        db.close()


@pytest.mark.timeout(10)
def test_bundle_features_and_audience_are_stored(test_db_session, override_get_db):
    (a,) = _tools(test_db_session, "alpha")
    app.dependency_overrides[get_db] = override_get_db
    try:
        body = {
            "name": "SEO Pack", "slug": "seo-pack", "priceMonthly": 699, "toolIds": [a],
            "features": "Ahrefs, SEMrush, Surfer SEO", "targetAudience": "Bloggers, agencies",
        }
        data = client.post("/api/admin/bundles", json=body, headers=ADMIN).json()
        assert data["features"] == "Ahrefs, SEMrush, Surfer SEO"
        assert data["targetAudience"] == "Bloggers, agencies"

        r = client.put(
            f"/api/admin/bundles/{data['id']}", json={**body, "features": "", "targetAudience": None}, headers=ADMIN
        )
        assert r.json()["features"] is None
        assert r.json()["targetAudience"] is None

        r = client.put(f"/api/admin/bundles/{data['id']}", json=body, headers=ADMIN)
        assert r.status_code == 200
        checkout = client.get(f"/checkout/bundle/{data['id']}", headers=ADMIN)
        assert checkout.status_code == 200
        assert "Ahrefs, SEMrush, Surfer SEO" in checkout.text
        assert "Bloggers, agencies" in checkout.text
    finally:
        app.dependency_overrides.pop(get_db, None)
