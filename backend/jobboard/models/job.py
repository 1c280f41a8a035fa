import enum

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from jobboard.db.base import Base, utcnow


class JobType(str, enum.Enum):
    FULL_TIME = "FULL_TIME"
    PART_TIME = "PART_TIME"
    CONTRACT = "CONTRACT"
    INTERN = "INTERN"
    REMOTE = "REMOTE"


class WorkMode(str, enum.Enum):
    REMOTE = "REMOTE"
    HYBRID = "HYBRID"
    ONSITE = "ONSITE"


class JobStatus(str, enum.Enum):
    DRAFT = "DRAFT"
    OPEN = "OPEN"
    CLOSED = "CLOSED"


class Job(Base):
    """
    Job posting owned by a company.

    Either salary bound may be missing. When both are present
    ``salary_max >= salary_min``; that is checked on input, not here.
    """

    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, ForeignKey("companies.id"), index=True, nullable=False)

    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    job_type = Column(Enum(JobType, native_enum=False, length=20), nullable=False)
    work_mode = Column(Enum(WorkMode, native_enum=False, length=20), nullable=False, default=WorkMode.ONSITE)
    location = Column(String(200), nullable=False)

    salary_min = Column(Integer, nullable=True)
    salary_max = Column(Integer, nullable=True)
    experience = Column(Integer, nullable=True)  # required years, None = no requirement

    status = Column(Enum(JobStatus, native_enum=False, length=20), nullable=False, default=JobStatus.DRAFT, index=True)
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    # Relationships
    company = relationship("Company", back_populates="jobs")
    applications = relationship("Application", back_populates="job", cascade="all, delete-orphan")
    saved_by = relationship("SavedJob", back_populates="job", cascade="all, delete-orphan")
