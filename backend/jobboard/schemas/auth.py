import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from jobboard.models import Role

MIN_PASSWORD_LENGTH = 8
MOBILE_PATTERN = re.compile(r"^\d{10}$")
EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+$")


def _check_mobile(v: Optional[str]) -> Optional[str]:
    if v is None or v == "":
        return None
    if not MOBILE_PATTERN.match(v):
        raise ValueError("Mobile number must be exactly 10 digits")
    return v


class CandidateSignup(BaseModel):
    """Schema for job seeker registration."""

    model_config = ConfigDict(str_strip_whitespace=True)

    full_name: str = Field(..., min_length=2)
    email: str
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)
    mobile_number: Optional[str] = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Validate email format."""
        if not EMAIL_PATTERN.match(v):
            raise ValueError("Invalid email format")
        return v.lower()

    @field_validator("mobile_number")
    @classmethod
    def validate_mobile(cls, v: Optional[str]) -> Optional[str]:
        return _check_mobile(v)


class EmployerSignup(CandidateSignup):
    """Schema for recruiter registration: user, profile and company at once."""

    company_name: str = Field(..., min_length=2)


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)


class UserResponse(BaseModel):
    """Schema for user response (without password)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    role: Role
    full_name: Optional[str] = None
    company_id: Optional[int] = None  # set for employers with a company


class AuthResponse(BaseModel):
    message: str
    user: UserResponse
