"""
Request dependencies.

``get_current_user`` is the only place a session cookie is turned into an
identity. The role dependencies below chain it with the RBAC guards so a
handler can declare the role it needs in its signature.
"""

from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from jobboard.core.config import Settings
from jobboard.core.cookies import get_session_token
from jobboard.core.rbac import (
    Identity,
    require_admin,
    require_candidate,
    require_employer,
    require_user,
)
from jobboard.db.session import get_db
from jobboard.services.sessions import validate_session


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> Optional[Identity]:
    """
    Resolve the caller from the session cookie.

    Returns:
        The identity, or None if the cookie is missing, unknown, expired or
        belongs to a deactivated account
    """
    return validate_session(db, get_session_token(request, settings))


def get_authenticated_user(user: Optional[Identity] = Depends(get_current_user)) -> Identity:
    return require_user(user)


def get_candidate(user: Optional[Identity] = Depends(get_current_user)) -> Identity:
    return require_candidate(user)


def get_employer(user: Optional[Identity] = Depends(get_current_user)) -> Identity:
    return require_employer(user)


def get_admin(user: Optional[Identity] = Depends(get_current_user)) -> Identity:
    return require_admin(user)
