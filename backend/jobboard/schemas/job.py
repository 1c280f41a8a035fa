from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from jobboard.models import JobStatus, JobType, WorkMode
from jobboard.schemas.search import MAX_SALARY_FILTER

SALARY_RANGE_MESSAGE = "Maximum salary must be greater than or equal to minimum salary"


class JobCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=3, max_length=200)
    description: str = Field(..., min_length=10)
    job_type: JobType
    work_mode: WorkMode = WorkMode.ONSITE
    location: str = Field(..., min_length=2, max_length=200)
    salary_min: Optional[int] = Field(None, ge=0, le=MAX_SALARY_FILTER)
    salary_max: Optional[int] = Field(None, ge=0, le=MAX_SALARY_FILTER)
    experience: Optional[int] = Field(None, ge=0, le=50)
    status: JobStatus = JobStatus.DRAFT

    @model_validator(mode="after")
    def check_salary_range(self) -> "JobCreate":
        if self.salary_min is not None and self.salary_max is not None and self.salary_max < self.salary_min:
            raise ValueError(SALARY_RANGE_MESSAGE)
        return self


class JobUpdate(BaseModel):
    """Partial update. Fields left out are not touched."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: Optional[str] = Field(None, min_length=3, max_length=200)
    description: Optional[str] = Field(None, min_length=10)
    job_type: Optional[JobType] = None
    work_mode: Optional[WorkMode] = None
    location: Optional[str] = Field(None, min_length=2, max_length=200)
    salary_min: Optional[int] = Field(None, ge=0, le=MAX_SALARY_FILTER)
    salary_max: Optional[int] = Field(None, ge=0, le=MAX_SALARY_FILTER)
    experience: Optional[int] = Field(None, ge=0, le=50)
    status: Optional[JobStatus] = None


class JobDetail(BaseModel):
    id: int
    title: str
    description: str
    job_type: JobType
    work_mode: WorkMode
    location: str
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None
    experience: Optional[int] = None
    status: JobStatus
    company_id: int
    company_name: str
    created_at: datetime
    updated_at: datetime
    is_saved: Optional[bool] = None
