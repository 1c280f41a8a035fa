"""
Authentication API endpoints.

Handles signup, login and logout with server-side sessions carried in an
HttpOnly cookie.
"""

import logging

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from jobboard.api.deps import get_authenticated_user, get_settings
from jobboard.core.config import Settings
from jobboard.core.cookies import clear_session_cookie, get_session_token, set_session_cookie
from jobboard.core.rbac import Identity
from jobboard.db.session import get_db
from jobboard.schemas.auth import (
    AuthResponse,
    CandidateSignup,
    ChangePasswordRequest,
    EmployerSignup,
    LoginRequest,
    UserResponse,
)
from jobboard.services import auth as auth_service

logger = logging.getLogger("auth")

router = APIRouter()


def build_user_response(db: Session, user_id: int) -> UserResponse:
    user = auth_service.get_account(db, user_id)
    return UserResponse(
        id=user.id,
        email=user.email,
        role=user.role,
        full_name=user.profile.full_name if user.profile else None,
        company_id=user.company.id if user.company else None,
    )


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def signup(
    data: CandidateSignup,
    response: Response,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Register a job seeker and log them in."""
    identity, token = auth_service.signup_candidate(db, data, settings)
    set_session_cookie(response, token, settings)
    return AuthResponse(message="Account created successfully", user=build_user_response(db, identity.id))


@router.post("/employer/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def employer_signup(
    data: EmployerSignup,
    response: Response,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Register a recruiter together with their company and log them in."""
    identity, token = auth_service.register_employer(db, data, settings)
    set_session_cookie(response, token, settings)
    return AuthResponse(
        message="Employer account created successfully",
        user=build_user_response(db, identity.id),
    )


@router.post("/login", response_model=AuthResponse)
def login(
    data: LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    identity, token = auth_service.login(db, data.email, data.password, settings)
    set_session_cookie(response, token, settings)
    logger.info(f"User {identity.id} logged in")
    return AuthResponse(message="Login successful", user=build_user_response(db, identity.id))


@router.post("/logout")
def logout(
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Delete the current session. Succeeds even without one."""
    auth_service.logout(db, get_session_token(request, settings))
    clear_session_cookie(response, settings)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=UserResponse)
def get_me(
    user: Identity = Depends(get_authenticated_user),
    db: Session = Depends(get_db),
):
    return build_user_response(db, user.id)


@router.post("/change-password")
def change_password(
    data: ChangePasswordRequest,
    response: Response,
    user: Identity = Depends(get_authenticated_user),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Change the password. Every session, this one included, is revoked."""
    auth_service.change_password(db, user, data.current_password, data.new_password, settings)
    clear_session_cookie(response, settings)
    return {"message": "Password changed successfully. Please log in again."}
