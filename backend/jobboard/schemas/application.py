from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from jobboard.models import ApplicationStatus, JobStatus

MAX_COVER_NOTE_LENGTH = 5000


class ApplyRequest(BaseModel):
    cover_note: Optional[str] = Field(None, max_length=MAX_COVER_NOTE_LENGTH)


class StatusUpdateRequest(BaseModel):
    status: ApplicationStatus


class ApplicationResponse(BaseModel):
    """An application as seen by the candidate who made it."""

    id: int
    job_id: int
    job_title: str
    job_status: JobStatus
    company_name: str
    status: ApplicationStatus
    cover_note: Optional[str] = None
    created_at: datetime


class ApplicantResponse(BaseModel):
    """An application as seen by the employer who owns the job."""

    id: int
    job_id: int
    job_title: str
    user_id: int
    email: str
    full_name: Optional[str] = None
    experience: Optional[int] = None
    status: ApplicationStatus
    cover_note: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ApplicantProfile(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    full_name: str
    headline: Optional[str] = None
    mobile_number: Optional[str] = None
    experience: int


class ApplicantDetail(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    mobile_number: Optional[str] = None
    profile: Optional[ApplicantProfile] = None


class ApplicationDetailResponse(BaseModel):
    """Full applicant view for the employer who owns the job."""

    id: int
    job_id: int
    job_title: str
    status: ApplicationStatus
    cover_note: Optional[str] = None
    created_at: datetime
    applicant: ApplicantDetail
