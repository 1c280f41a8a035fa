import enum

from sqlalchemy import Boolean, Column, DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from jobboard.db.base import Base, utcnow


class CompanyType(str, enum.Enum):
    CORPORATE = "CORPORATE"
    FOREIGN_MNC = "FOREIGN_MNC"
    STARTUP = "STARTUP"
    INDIAN_MNC = "INDIAN_MNC"
    GOVT = "GOVT"
    OTHERS = "OTHERS"


class Company(Base):
    """Employer company profile. One employer owns at most one company."""

    __tablename__ = "companies"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)

    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    website = Column(String, nullable=True)
    location = Column(String, nullable=True)
    logo_url = Column(String, nullable=True)
    company_type = Column(Enum(CompanyType, native_enum=False, length=20), nullable=True)
    size = Column(String(50), nullable=True)

    # Admin-controlled
    is_verified = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    # Relationships
    owner = relationship("User", back_populates="company")
    jobs = relationship("Job", back_populates="company", cascade="all, delete-orphan")
