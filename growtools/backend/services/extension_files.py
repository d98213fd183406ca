"""Browser extension artifacts: lookup for downloads and zip packaging."""
import json
import logging
import zipfile
from pathlib import Path

from growtools.backend.config import get_settings

logger = logging.getLogger(__name__)

USER_ARTIFACTS = ("growtools-extension.zip", "alitool-extension.zip")
ADMIN_ARTIFACTS = ("admin-extension.zip",)

EXTENSION_FILES = (
    "manifest.json",
    "background.js",
    "popup.html",
    "popup.js",
    "content.js",
)

DASHBOARD_URL_PLACEHOLDER = "__GROWTOOLS_DASHBOARD_URL__"
# scripts that carry the dashboard URL placeholder
TEMPLATED_FILES = ("popup.js", "content.js")


class ExtensionBuildError(Exception):
    pass


def extension_dir() -> Path:
    return Path(get_settings().extension_dir)


def find_artifact(names: tuple[str, ...], directory: Path | None = None) -> Path | None:
    """First existing artifact among names, in preference order."""
    base = directory or extension_dir()
    for name in names:
        p = base / name
        if p.is_file():
            return p
    return None


def read_manifest_version(source_dir: Path) -> str:
    try:
        manifest = json.loads((source_dir / "manifest.json").read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ExtensionBuildError(f"manifest.json unreadable: {e}") from e
    version = manifest.get("version")
    if not isinstance(version, str) or not version:
        raise ExtensionBuildError("manifest.json has no version")
    return version


def build_extension_zip(source_dir: Path, output_path: Path, dashboard_url: str) -> Path:
    """Pack the extension, baking the dashboard URL into the popup and content scripts."""
    missing = [f for f in EXTENSION_FILES if not (source_dir / f).is_file()]
    if missing:
        raise ExtensionBuildError(f"missing files: {', '.join(missing)}")
    version = read_manifest_version(source_dir)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    if output_path.exists():
        output_path.unlink()

    with zipfile.ZipFile(output_path, "w", compression=zipfile.ZIP_DEFLATED, compresslevel=9) as zf:
        for name in EXTENSION_FILES:
            path = source_dir / name
            if name in TEMPLATED_FILES:
                text = path.read_text(encoding="utf-8").replace(DASHBOARD_URL_PLACEHOLDER, dashboard_url)
                zf.writestr(name, text)
            else:
                zf.write(path, arcname=name)
        for extra in sorted(source_dir.glob("icons/*.png")):
            zf.write(extra, arcname=f"icons/{extra.name}")

    logger.info("extension %s packed to %s (%d bytes)", version, output_path, output_path.stat().st_size)
    return output_path
