"""
Session cookie helpers.

The cookie is HttpOnly, SameSite=Lax, Secure in production, scoped to
``/`` and lives exactly as long as the server-side session.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Request, Response

from jobboard.core.config import Settings


def get_session_token(request: Request, settings: Settings) -> Optional[str]:
    return request.cookies.get(settings.SESSION_COOKIE_NAME)


def set_session_cookie(response: Response, session_token: str, settings: Settings) -> None:
    max_age = int(timedelta(days=settings.SESSION_DURATION_DAYS).total_seconds())
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=session_token,
        max_age=max_age,
        expires=datetime.now(timezone.utc) + timedelta(seconds=max_age),
        path="/",
        secure=settings.is_production,
        httponly=True,
        samesite="lax",
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    # Same attributes as when set, otherwise browsers keep the old cookie
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value="",
        max_age=0,
        expires=datetime(1970, 1, 1, tzinfo=timezone.utc),
        path="/",
        secure=settings.is_production,
        httponly=True,
        samesite="lax",
    )
