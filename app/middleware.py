import logging

from fastapi.responses import RedirectResponse
from fastapi.security.utils import get_authorization_scheme_param
from starlette.middleware.base import BaseHTTPMiddleware

from app.dependencies import session_token
from app.utils.security import decode_access_token

logger = logging.getLogger(__name__)

LOGIN_PATH = "/login"
DASHBOARD_PATH = "/dashboard"


def _is_dashboard(path: str) -> bool:
    return path == DASHBOARD_PATH or path.startswith(DASHBOARD_PATH + "/")


def _bearer_token(request) -> str | None:
    scheme, param = get_authorization_scheme_param(request.headers.get("Authorization"))
    if scheme.lower() != "bearer" or not param:
        return None
    return param


class SessionGuardMiddleware(BaseHTTPMiddleware):
    """Redirects page requests based on the caller's session.

    The session is read the same way protected routes read it: a bearer
    header first, then the session cookie. Anonymous visitors to the
    dashboard go to the login page, signed-in visitors to the login page go
    to the dashboard. API routes are left to their own 401 handling.
    """

    async def dispatch(self, request, call_next):
        if request.method == "GET":
            path = request.url.path
            signed_in = decode_access_token(session_token(request, _bearer_token(request))) is not None

            if _is_dashboard(path) and not signed_in:
                logger.debug("Guard: %s requires a session, redirecting to login", path)
                return RedirectResponse(LOGIN_PATH, status_code=302)
            if path == LOGIN_PATH and signed_in:
                logger.debug("Guard: already signed in, redirecting to dashboard")
                return RedirectResponse(DASHBOARD_PATH, status_code=302)

        return await call_next(request)
