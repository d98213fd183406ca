"""FastAPI entry point."""
import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from growtools.backend.config import DEFAULT_COOKIE_ENCRYPTION_KEY, get_settings
from growtools.backend.logging_config import setup_logging
from growtools.backend.middleware.route_access import RouteAccessMiddleware
from growtools.backend.routers import health, pages, catalog, config, cookies, extension, web_auth
from growtools.backend.routers import admin_tools, admin_bundles, admin_reviews, admin_settings, admin_access
from growtools.backend.routers import admin_users
from growtools.backend.utils.api_errors import error_body

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    s = get_settings()
    if s.cookie_encryption_key == DEFAULT_COOKIE_ENCRYPTION_KEY:
        logger.warning("COOKIE_ENCRYPTION_KEY is not set; tool cookies are encrypted with the built-in default key")
    yield


app = FastAPI(
    title="GrowTools",
    description="Subscription storefront for shared premium tool access",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(RouteAccessMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, tags=["System"])
app.include_router(admin_tools.router, prefix="/api/admin/tools", tags=["Admin Tools"])
app.include_router(admin_bundles.router, prefix="/api/admin/bundles", tags=["Admin Bundles"])
app.include_router(admin_reviews.router, prefix="/api/admin/reviews", tags=["Admin Reviews"])
app.include_router(admin_settings.router, prefix="/api/admin/settings", tags=["Admin Settings"])
app.include_router(admin_users.router, prefix="/api/admin/users", tags=["Admin Users"])
app.include_router(admin_access.router, prefix="/api/admin", tags=["Admin Access"])
app.include_router(config.router, prefix="/api/config", tags=["Config"])
app.include_router(extension.router, prefix="/api/extension", tags=["Extension"])
app.include_router(cookies.router, prefix="/api/cookies", tags=["Cookies"])
app.include_router(web_auth.router, prefix="/api/auth", tags=["Auth"])
app.include_router(catalog.router, prefix="/api", tags=["Catalog"])
app.include_router(pages.router, tags=["Pages"])


def _trace_id(request: Request) -> str:
    return getattr(request.state, "trace_id", None) or str(uuid.uuid4())[:16]


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    detail = exc.detail
    if not isinstance(detail, str):
        detail = str(detail) if detail else "Error"
    return JSONResponse(content=error_body(detail), status_code=exc.status_code, headers=exc.headers)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """API callers always get a JSON body with a trace id, never an HTML traceback."""
    path = request.url.path
    trace_id = _trace_id(request)
    logger.exception("Unhandled exception trace_id=%s path=%s", trace_id, path)
    if path.startswith("/api/"):
        resp = JSONResponse(content=error_body("Internal server error", trace_id=trace_id), status_code=500)
        resp.headers["X-Trace-Id"] = trace_id
        return resp
    raise exc
