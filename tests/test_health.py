"""Health and readiness endpoints."""
import pytest
import redis
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from growtools.backend.main import app
from growtools.backend.deps import get_db
from growtools.backend.database import get_test_engine, Base
from growtools.backend.routers import health

client = TestClient(app)


class _FakeRedis:
    def __init__(self, fail: bool = False):
        self.fail = fail

    def ping(self):
        if self.fail:
            raise redis.ConnectionError("connection refused")
        return True


@pytest.fixture
def override_get_db():
    engine = get_test_engine()
    Base.metadata.create_all(engine)
    db = sessionmaker(bind=engine)()

    def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db
    try:
        yield db
    finally:
        app.dependency_overrides.pop(get_db, None)
        db.close()


def test_health():
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "service": "growtools"}


@pytest.mark.timeout(10)
def test_ready_ok(override_get_db, monkeypatch):
    monkeypatch.setattr(health, "get_redis", lambda: _FakeRedis())
    r = client.get("/ready")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


@pytest.mark.timeout(10)
def test_ready_redis_down_is_503(override_get_db, monkeypatch):
    monkeypatch.setattr(health, "get_redis", lambda: _FakeRedis(fail=True))
    r = client.get("/ready")
    assert r.status_code == 503
    body = r.json()
    assert body["status"] == "error"
    assert body["detail"].startswith("redis:")
