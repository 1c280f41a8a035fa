"""Job search request and response models."""

import enum
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from jobboard.models import JobType, WorkMode

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 50
MAX_SALARY_FILTER = 10_000_000
MAX_TEXT_FILTER_LENGTH = 200


class JobSortOption(str, enum.Enum):
    NEWEST = "newest"
    SALARY_HIGH = "salary_high"
    SALARY_LOW = "salary_low"


class JobSearchFilters(BaseModel):
    """Combinable filters. ``None`` means the filter is not applied."""

    query: Optional[str] = None  # title OR description
    location: Optional[str] = None
    job_type: Optional[JobType] = None
    min_salary: Optional[int] = None
    max_salary: Optional[int] = None
    experience: Optional[int] = None  # ceiling on required years


class JobSearchParams(BaseModel):
    filters: JobSearchFilters = Field(default_factory=JobSearchFilters)
    sort: JobSortOption = JobSortOption.NEWEST
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE
    user_id: Optional[int] = None  # enables is_saved and saved_only
    saved_only: bool = False


class JobSearchQuery(BaseModel):
    """
    Query-string filters accepted by ``GET /jobs``.

    Page and limit only need to be integers; the search engine clamps
    them into range.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    query: Optional[str] = Field(None, max_length=MAX_TEXT_FILTER_LENGTH)
    location: Optional[str] = Field(None, max_length=MAX_TEXT_FILTER_LENGTH)
    job_type: Optional[JobType] = None
    min_salary: Optional[int] = Field(None, ge=0, le=MAX_SALARY_FILTER)
    max_salary: Optional[int] = Field(None, ge=0, le=MAX_SALARY_FILTER)
    experience: Optional[int] = Field(None, ge=0)
    sort: JobSortOption = JobSortOption.NEWEST
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE
    saved_only: bool = False

    @field_validator("query", "location")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None

    @model_validator(mode="after")
    def check_salary_range(self) -> "JobSearchQuery":
        if (
            self.min_salary is not None
            and self.max_salary is not None
            and self.min_salary > self.max_salary
        ):
            raise ValueError("minSalary cannot be greater than maxSalary")
        return self

    def to_params(self, user_id: Optional[int] = None) -> JobSearchParams:
        return JobSearchParams(
            filters=JobSearchFilters(
                query=self.query,
                location=self.location,
                job_type=self.job_type,
                min_salary=self.min_salary,
                max_salary=self.max_salary,
                experience=self.experience,
            ),
            sort=self.sort,
            page=self.page,
            limit=self.limit,
            user_id=user_id,
            saved_only=self.saved_only,
        )


class JobSearchResult(BaseModel):
    """Read-optimized projection of an open job."""

    job_id: int
    title: str
    location: str
    job_type: JobType
    work_mode: WorkMode
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None
    experience: Optional[int] = None
    company_name: str
    created_at: datetime
    is_saved: Optional[bool] = None  # None when searching anonymously


class Pagination(BaseModel):
    total_count: int
    total_pages: int
    current_page: int
    limit: int
    has_next_page: bool
    has_previous_page: bool


class JobSearchResponse(BaseModel):
    jobs: list[JobSearchResult]
    pagination: Pagination
