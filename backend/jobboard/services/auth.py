"""
Authentication service.

Signup, login, logout and password changes. Signups write the user, the
profile, the company (employers) and the first session in one
transaction: either all of it is stored or none of it.
"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from jobboard.core.config import Settings
from jobboard.core.errors import AuthenticationError, AuthorizationError, ConflictError, ValidationError
from jobboard.core.rbac import Identity
from jobboard.core.security import get_password_hash, verify_password
from jobboard.models import Company, Profile, Role, User
from jobboard.schemas.auth import CandidateSignup, EmployerSignup
from jobboard.services.sessions import create_session, delete_all_sessions_for_user, delete_session

logger = logging.getLogger("auth")

DUPLICATE_EMAIL_MESSAGE = "An account with this email already exists"


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    """Get a user by email address (case-insensitive)."""
    return db.query(User).filter(User.email == email.strip().lower()).first()


def get_account(db: Session, user_id: int) -> User:
    """Load a user with the profile and company shown on "me" responses."""
    user = (
        db.query(User)
        .options(joinedload(User.profile), joinedload(User.company))
        .filter(User.id == user_id)
        .first()
    )
    if user is None:
        raise AuthenticationError("User not found")
    return user


def _create_account(
    db: Session,
    data: CandidateSignup,
    role: Role,
    settings: Settings,
    company_name: Optional[str] = None,
) -> tuple[Identity, str]:
    # Advisory: the unique index on users.email decides
    if get_user_by_email(db, data.email) is not None:
        raise ConflictError(DUPLICATE_EMAIL_MESSAGE)

    hashed_password = get_password_hash(data.password, rounds=settings.BCRYPT_ROUNDS)

    try:
        user = User(
            email=data.email,
            hashed_password=hashed_password,
            role=role,
            mobile_number=data.mobile_number,
        )
        db.add(user)
        db.flush()

        db.add(
            Profile(
                user_id=user.id,
                full_name=data.full_name,
                mobile_number=data.mobile_number,
                experience=0,
            )
        )
        if company_name is not None:
            db.add(Company(owner_id=user.id, name=company_name, description=""))

        token = create_session(db, user.id, settings.SESSION_DURATION_DAYS, commit=False)
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(DUPLICATE_EMAIL_MESSAGE)
    except Exception:
        db.rollback()
        raise

    logger.info(f"Created {role.value} account {user.id}")
    return Identity(id=user.id, email=user.email, role=user.role), token


def signup_candidate(db: Session, data: CandidateSignup, settings: Settings) -> tuple[Identity, str]:
    """
    Register a job seeker.

    Returns:
        The new identity and its session token
    """
    return _create_account(db, data, Role.CANDIDATE, settings)


def register_employer(db: Session, data: EmployerSignup, settings: Settings) -> tuple[Identity, str]:
    """Register a recruiter together with their company."""
    return _create_account(db, data, Role.EMPLOYER, settings, company_name=data.company_name)


def login(db: Session, email: str, password: str, settings: Settings) -> tuple[Identity, str]:
    """
    Check credentials and open a new session.

    Raises:
        AuthenticationError: unknown email or wrong password (same message)
        AuthorizationError: the account has been deactivated
    """
    user = get_user_by_email(db, email)
    if user is None or not verify_password(password, user.hashed_password):
        logger.info("Login failed: invalid credentials")
        raise AuthenticationError("Invalid email or password")

    if not user.is_active:
        logger.info(f"Login refused for deactivated user {user.id}")
        raise AuthorizationError("Account is deactivated")

    token = create_session(db, user.id, settings.SESSION_DURATION_DAYS)
    return Identity(id=user.id, email=user.email, role=user.role), token


def logout(db: Session, session_token: Optional[str]) -> None:
    if session_token:
        delete_session(db, session_token)


def change_password(
    db: Session,
    user: Identity,
    current_password: str,
    new_password: str,
    settings: Settings,
) -> None:
    """
    Replace the password and sign the user out everywhere.

    The new hash and the session purge are committed together.
    """
    record = db.query(User).filter(User.id == user.id).first()
    if record is None:
        raise AuthenticationError("User not found")

    if not verify_password(current_password, record.hashed_password):
        raise ValidationError("Current password is incorrect")

    record.hashed_password = get_password_hash(new_password, rounds=settings.BCRYPT_ROUNDS)
    delete_all_sessions_for_user(db, user.id, commit=False)
    db.commit()
    logger.info(f"Password changed for user {user.id}; all sessions revoked")
