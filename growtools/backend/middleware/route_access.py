"""Middleware: session gate for the dashboard, admin, checkout and payment pages."""
from urllib.parse import quote

from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from growtools.backend.auth import session_from_token, token_from_request

PROTECTED_PREFIXES = ("/dashboard", "/admin", "/checkout", "/payment")
LOGIN_PATH = "/login"


def _under(path: str, prefix: str) -> bool:
    return path == prefix or path.startswith(prefix + "/")


def is_protected(path: str) -> bool:
    return any(_under(path, p) for p in PROTECTED_PREFIXES)


class RouteAccessMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if not is_protected(path):
            return await call_next(request)

        session = session_from_token(token_from_request(request))
        if session is None:
            return RedirectResponse(f"{LOGIN_PATH}?callbackUrl={quote(path, safe='')}")

        # admins land on /admin instead of the customer dashboard
        if path == "/dashboard" and session.is_admin:
            return RedirectResponse("/admin")
        if _under(path, "/admin") and not session.is_admin:
            return RedirectResponse("/dashboard")

        request.state.session = session
        return await call_next(request)
