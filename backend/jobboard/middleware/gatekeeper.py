"""
Edge gatekeeper.

A cheap first filter in front of the routers. It only checks that a
session cookie of the right shape is present; whether the session is
real, unexpired and belongs to an active account is decided later by
``get_current_user``. Never rely on this alone for authorization.
"""

import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

from fastapi.responses import JSONResponse, RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from jobboard.core.config import Settings
from jobboard.core.security import is_session_token_shaped

logger = logging.getLogger("gatekeeper")

PUBLIC_PREFIXES = (
    "/api/v1/auth",
    "/api/v1/jobs",
    "/api/v1/companies",
    "/login",
    "/signup",
    "/health",
    "/docs",
    "/redoc",
    "/openapi.json",
    "/static",
)

LOGIN_PATH = "/login"


@dataclass(frozen=True)
class GateDecision:
    allowed: bool
    status_code: int = 200
    redirect_to: Optional[str] = None


def is_public_path(path: str) -> bool:
    if path == "/":
        return True
    return any(path == prefix or path.startswith(prefix + "/") for prefix in PUBLIC_PREFIXES)


def gate_request(path: str, session_token: Optional[str]) -> GateDecision:
    """
    Decide whether a request may reach the routers.

    Returns:
        allowed for public paths and well-formed tokens; otherwise a 401
        for ``/api`` paths or a 307 to the login page for everything else
    """
    if is_public_path(path):
        return GateDecision(allowed=True)

    if session_token and is_session_token_shaped(session_token):
        return GateDecision(allowed=True)

    if path == "/api" or path.startswith("/api/"):
        return GateDecision(allowed=False, status_code=401)

    return GateDecision(
        allowed=False,
        status_code=307,
        redirect_to=f"{LOGIN_PATH}?redirect={quote(path, safe='/')}",
    )


class EdgeGatekeeperMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, settings: Settings):
        super().__init__(app)
        self.cookie_name = settings.SESSION_COOKIE_NAME

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        decision = gate_request(path, request.cookies.get(self.cookie_name))
        if decision.allowed:
            return await call_next(request)

        logger.info(f"Gatekeeper blocked {request.method} {path} ({decision.status_code})")
        if decision.redirect_to is not None:
            return RedirectResponse(decision.redirect_to, status_code=decision.status_code)
        return JSONResponse(
            status_code=decision.status_code,
            content={"error": {"code": "UNAUTHORIZED", "message": "Unauthorized"}},
        )
