"""Browser extension downloads (prebuilt zip artifacts)."""
import logging

from fastapi import APIRouter
from fastapi.responses import FileResponse

from growtools.backend.services.extension_files import ADMIN_ARTIFACTS, USER_ARTIFACTS, find_artifact
from growtools.backend.utils.api_errors import error_response

router = APIRouter()
logger = logging.getLogger(__name__)


def _zip_response(path) -> FileResponse:
    # FileResponse sets Content-Disposition: attachment and Content-Length
    return FileResponse(path, media_type="application/zip", filename=path.name)


@router.get("/download")
def download_extension():
    path = find_artifact(USER_ARTIFACTS)
    if not path:
        logger.error("extension artifact missing, looked for %s", ", ".join(USER_ARTIFACTS))
        return error_response(404, "Extension file not found. Please contact support.")
    return _zip_response(path)


@router.get("/admin-download")
def download_admin_extension():
    path = find_artifact(ADMIN_ARTIFACTS)
    if not path:
        logger.error("admin extension artifact missing")
        return error_response(404, "Admin extension file not found. Please contact support.")
    return _zip_response(path)
