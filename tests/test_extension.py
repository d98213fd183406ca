"""Extension zip downloads and packaging."""
import json
import zipfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from growtools.backend.main import app
from growtools.backend.services import extension_files
from growtools.backend.services.extension_files import (
    DASHBOARD_URL_PLACEHOLDER,
    ExtensionBuildError,
    build_extension_zip,
)

client = TestClient(app)

SOURCE = Path(__file__).resolve().parent.parent / "extension"


@pytest.fixture
def ext_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(extension_files, "extension_dir", lambda: tmp_path)
    return tmp_path


def test_download_missing_is_404(ext_dir):
    r = client.get("/api/extension/download")
    assert r.status_code == 404
    assert r.json() == {"error": "Extension file not found. Please contact support."}

    r = client.get("/api/extension/admin-download")
    assert r.status_code == 404
    assert r.json() == {"error": "Admin extension file not found. Please contact support."}


def test_download_prefers_growtools_zip(ext_dir):
    (ext_dir / "alitool-extension.zip").write_bytes(b"PK-legacy")
    r = client.get("/api/extension/download")
    assert r.status_code == 200
    assert r.content == b"PK-legacy"
    assert 'filename="alitool-extension.zip"' in r.headers["content-disposition"]

    (ext_dir / "growtools-extension.zip").write_bytes(b"PK-current")
    r = client.get("/api/extension/download")
    assert r.status_code == 200
    assert r.headers["content-type"] == "application/zip"
    assert r.headers["content-disposition"].startswith("attachment")
    assert 'filename="growtools-extension.zip"' in r.headers["content-disposition"]
    assert r.content == b"PK-current"


def test_admin_download(ext_dir):
    (ext_dir / "admin-extension.zip").write_bytes(b"PK-admin")
    r = client.get("/api/extension/admin-download")
    assert r.status_code == 200
    assert r.content == b"PK-admin"


def test_build_bakes_dashboard_url(tmp_path):
    out = build_extension_zip(SOURCE, tmp_path / "out" / "growtools-extension.zip", "https://growtools.app/dashboard")
    with zipfile.ZipFile(out) as zf:
        names = set(zf.namelist())
        assert {"manifest.json", "background.js", "popup.html", "popup.js", "content.js"} <= names
        popup = zf.read("popup.js").decode("utf-8")
        content = zf.read("content.js").decode("utf-8")
        manifest = json.loads(zf.read("manifest.json"))
    assert "https://growtools.app/dashboard" in popup
    assert DASHBOARD_URL_PLACEHOLDER not in popup
    assert "GROWTOOLS_CHECK" in popup
    assert manifest["manifest_version"] == 3
    assert "https://growtools.app/dashboard" in content
    assert DASHBOARD_URL_PLACEHOLDER not in content
    assert "GROWTOOLS_INJECT" in content
    assert manifest["content_scripts"][0]["js"] == ["content.js"]


def test_build_fails_on_missing_file(tmp_path):
    src = tmp_path / "src"
    src.mkdir()
    (src / "manifest.json").write_text(json.dumps({"version": "1.0.0"}), encoding="utf-8")
    (src / "popup.html").write_text("<html></html>", encoding="utf-8")
    with pytest.raises(ExtensionBuildError) as exc:
        build_extension_zip(src, tmp_path / "x.zip", "https://example.com/dashboard")
    assert "background.js" in str(exc.value)
    assert "popup.js" in str(exc.value)
    assert "content.js" in str(exc.value)
    assert not (tmp_path / "x.zip").exists()
