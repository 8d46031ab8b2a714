"""Session middleware: attach the caller's session and guard page paths."""

from collections.abc import Callable

from fastapi import Request, Response
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware

from pta.core.config import settings
from pta.core.security import get_session_from_request


def _is_api_path(path: str) -> bool:
    return path == "/api" or path.startswith("/api/")


class SessionMiddleware(BaseHTTPMiddleware):
    """
    Resolve the session once per request and store it on ``request.state``.

    Page paths are redirected the way the frontend expects:
    - protected pages without a session go to the sign-in page
    - sign-in/sign-up pages with a session go to the dashboard

    API paths are never redirected; their dependencies answer 401.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        session = get_session_from_request(request)
        request.state.session = session

        path = request.url.path
        if not _is_api_path(path):
            if session is None and path.startswith(settings.PROTECTED_PATH_PREFIX):
                return RedirectResponse(settings.SIGN_IN_PATH, status_code=307)

            if session is not None and (
                path.startswith(settings.SIGN_IN_PATH) or path.startswith(settings.SIGN_UP_PATH)
            ):
                return RedirectResponse(settings.PROTECTED_PATH_PREFIX, status_code=307)

        return await call_next(request)
