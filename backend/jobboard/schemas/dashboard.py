from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from jobboard.models import ApplicationStatus, JobStatus


class ApplicationStatusCount(BaseModel):
    status: ApplicationStatus
    count: int


class JobStatusCount(BaseModel):
    status: JobStatus
    count: int


class RecentApplication(BaseModel):
    application_id: int
    job_id: int
    job_title: str
    status: ApplicationStatus
    created_at: datetime


class EmployerOverview(BaseModel):
    total_jobs: int
    open_jobs: int
    total_applications: int
    applications_by_status: list[ApplicationStatusCount]
    recent_applications: list[RecentApplication]


class EmployerJob(BaseModel):
    id: int
    title: str
    status: JobStatus
    application_count: int
    created_at: datetime


class JobStats(BaseModel):
    total_applications: int
    applications_by_status: list[ApplicationStatusCount]
    last_application_at: Optional[datetime] = None


class AdminOverview(BaseModel):
    total_users: int
    total_employers: int
    total_companies: int
    total_jobs: int
    total_applications: int
    jobs_by_status: list[JobStatusCount]
    applications_by_status: list[ApplicationStatusCount]
