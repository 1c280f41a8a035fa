from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from jobboard.models import JobStatus, JobType, Role

ADMIN_DEFAULT_PAGE_SIZE = 20
ADMIN_MAX_PAGE_SIZE = 100


class AdminUser(BaseModel):
    id: int
    email: str
    role: Role
    is_active: bool
    full_name: Optional[str] = None
    created_at: datetime


class AdminUserList(BaseModel):
    total: int
    page: int
    limit: int
    users: list[AdminUser]


class UserActiveUpdate(BaseModel):
    is_active: bool


class AdminCompany(BaseModel):
    id: int
    name: str
    owner_id: int
    owner_email: str
    is_verified: bool
    job_count: int
    created_at: datetime


class CompanyVerifiedUpdate(BaseModel):
    is_verified: bool


class AdminJob(BaseModel):
    id: int
    title: str
    company_id: int
    company_name: str
    job_type: JobType
    status: JobStatus
    created_at: datetime


class AdminJobList(BaseModel):
    total: int
    page: int
    limit: int
    jobs: list[AdminJob]
