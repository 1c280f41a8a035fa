"""
Session management.

Creates, validates and deletes server-side sessions. A session is valid
while its row exists, ``expires_at`` is in the future and its user is
active; anything else resolves to no identity.
"""

import logging
from datetime import timedelta
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from jobboard.core.rbac import Identity
from jobboard.core.security import generate_session_token
from jobboard.db.base import utcnow
from jobboard.models import UserSession

logger = logging.getLogger("sessions")

SESSION_DURATION_DAYS = 7


def create_session(
    db: Session,
    user_id: int,
    duration_days: int = SESSION_DURATION_DAYS,
    commit: bool = True,
) -> str:
    """
    Create a new session for a user.

    Args:
        db: Database session
        user_id: Owner of the session
        duration_days: Absolute lifetime from creation
        commit: Commit immediately; pass False to join a larger transaction

    Returns:
        The session token to place in the cookie
    """
    now = utcnow()
    token = generate_session_token()
    db.add(
        UserSession(
            session_token=token,
            user_id=user_id,
            created_at=now,
            expires_at=now + timedelta(days=duration_days),
        )
    )
    if commit:
        db.commit()
    else:
        db.flush()
    return token


def validate_session(db: Session, session_token: Optional[str]) -> Optional[Identity]:
    """
    Resolve a session token to the identity that owns it.

    Expired sessions are removed on sight. Sessions of deactivated users
    are kept but do not authenticate.
    """
    if not session_token:
        return None

    session = (
        db.query(UserSession)
        .options(joinedload(UserSession.user))
        .filter(UserSession.session_token == session_token)
        .first()
    )
    if session is None:
        return None

    if session.expires_at < utcnow():
        session_id = session.id
        try:
            db.delete(session)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.warning(f"Could not delete expired session {session_id}: {e}")
        return None

    user = session.user
    if not user.is_active:
        logger.info(f"Rejected session for inactive user {user.id}")
        return None

    return Identity(id=user.id, email=user.email, role=user.role)


def delete_session(db: Session, session_token: str) -> None:
    db.query(UserSession).filter(UserSession.session_token == session_token).delete(
        synchronize_session=False
    )
    db.commit()


def delete_all_sessions_for_user(db: Session, user_id: int, commit: bool = True) -> int:
    """Delete every session of a user (password change, deactivation)."""
    deleted = db.query(UserSession).filter(UserSession.user_id == user_id).delete(
        synchronize_session=False
    )
    if commit:
        db.commit()
    logger.info(f"Deleted {deleted} session(s) for user {user_id}")
    return deleted
