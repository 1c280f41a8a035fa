import enum

from sqlalchemy import Boolean, Column, DateTime, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from jobboard.db.base import Base, utcnow


class Role(str, enum.Enum):
    CANDIDATE = "CANDIDATE"
    EMPLOYER = "EMPLOYER"
    ADMIN = "ADMIN"


class User(Base):
    """User model for authentication and authorization."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)  # stored lower-cased
    hashed_password = Column(String, nullable=False)
    role = Column(Enum(Role, native_enum=False, length=20), nullable=False, default=Role.CANDIDATE)
    is_active = Column(Boolean, nullable=False, default=True)
    mobile_number = Column(String, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    # Relationships
    profile = relationship("Profile", back_populates="user", uselist=False)
    company = relationship("Company", back_populates="owner", uselist=False)
    sessions = relationship("UserSession", back_populates="user", cascade="all, delete-orphan")
    applications = relationship("Application", back_populates="user")
    saved_jobs = relationship("SavedJob", back_populates="user", cascade="all, delete-orphan")


class Profile(Base):
    """Personal details captured at signup."""

    __tablename__ = "profiles"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    full_name = Column(String, nullable=False)
    headline = Column(String, nullable=True)
    mobile_number = Column(String, nullable=True)
    experience = Column(Integer, nullable=False, default=0)  # years

    user = relationship("User", back_populates="profile")
