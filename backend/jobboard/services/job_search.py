"""
Job search engine.

Compiles search filters into one SQL query over OPEN jobs, applies the
sort order and pagination, and projects rows into ``JobSearchResult``
DTOs. Closed and draft jobs are never returned.
"""

import logging
import math
from typing import Optional

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from jobboard.models import Company, Job, JobStatus, SavedJob
from jobboard.schemas.search import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    JobSearchFilters,
    JobSearchParams,
    JobSearchResponse,
    JobSearchResult,
    JobSortOption,
    Pagination,
)
from jobboard.services.saved_jobs import get_saved_job_ids

logger = logging.getLogger("job_search")


def clamp_pagination(page: Optional[int], limit: Optional[int]) -> tuple[int, int]:
    """Clamp page to >= 1 and limit to [1, 50]; missing values take defaults."""
    page = max(1, page or 1)
    limit = min(max(1, limit or DEFAULT_PAGE_SIZE), MAX_PAGE_SIZE)
    return page, limit


def build_pagination(total_count: int, page: int, limit: int) -> Pagination:
    total_pages = math.ceil(total_count / limit)
    return Pagination(
        total_count=total_count,
        total_pages=total_pages,
        current_page=page,
        limit=limit,
        has_next_page=page < total_pages,
        has_previous_page=page > 1,
    )


def build_job_conditions(
    filters: Optional[JobSearchFilters],
    user_id: Optional[int] = None,
    saved_only: bool = False,
) -> list:
    """
    Build the WHERE conditions (AND-combined) for a search.

    Salary bounds are an overlap test: a job with no ``salary_max`` can
    satisfy any requested minimum and a job with no ``salary_min`` any
    requested maximum. A job without an experience requirement matches
    any experience ceiling.
    """
    conditions = [Job.status == JobStatus.OPEN]

    if saved_only and user_id is not None:
        saved_ids = select(SavedJob.job_id).where(SavedJob.user_id == user_id)
        conditions.append(Job.id.in_(saved_ids))

    if filters is None:
        return conditions

    if filters.query and filters.query.strip():
        term = filters.query.strip()
        conditions.append(
            or_(
                Job.title.icontains(term, autoescape=True),
                Job.description.icontains(term, autoescape=True),
            )
        )

    if filters.location and filters.location.strip():
        conditions.append(Job.location.icontains(filters.location.strip(), autoescape=True))

    if filters.job_type is not None:
        conditions.append(Job.job_type == filters.job_type)

    if filters.min_salary is not None:
        conditions.append(or_(Job.salary_max >= filters.min_salary, Job.salary_max.is_(None)))

    if filters.max_salary is not None:
        conditions.append(or_(Job.salary_min <= filters.max_salary, Job.salary_min.is_(None)))

    if filters.experience is not None:
        conditions.append(or_(Job.experience <= filters.experience, Job.experience.is_(None)))

    return conditions


def build_order_by(sort: Optional[JobSortOption]) -> list:
    """ORDER BY clauses; jobs without a salary sort after those with one."""
    if sort == JobSortOption.SALARY_HIGH:
        return [
            Job.salary_max.desc().nulls_last(),
            Job.salary_min.desc().nulls_last(),
            Job.created_at.desc(),
            Job.id.desc(),
        ]
    if sort == JobSortOption.SALARY_LOW:
        return [
            Job.salary_min.asc().nulls_last(),
            Job.salary_max.asc().nulls_last(),
            Job.created_at.desc(),
            Job.id.desc(),
        ]
    return [Job.created_at.desc(), Job.id.desc()]


def search_jobs(db: Session, params: Optional[JobSearchParams] = None) -> JobSearchResponse:
    """
    Search open jobs with filtering, sorting and pagination.

    Args:
        db: Database session
        params: Filters, sort, pagination and the optional searching user

    Returns:
        One page of results plus pagination metadata
    """
    params = params or JobSearchParams()
    page, limit = clamp_pagination(params.page, params.limit)
    skip = (page - 1) * limit

    conditions = build_job_conditions(params.filters, params.user_id, params.saved_only)

    total_count = db.query(func.count(Job.id)).filter(*conditions).scalar() or 0
    rows = (
        db.query(Job, Company.name)
        .join(Job.company)
        .filter(*conditions)
        .order_by(*build_order_by(params.sort))
        .offset(skip)
        .limit(limit)
        .all()
    )

    saved_ids: set[int] = set()
    if params.user_id is not None:
        # One lookup for the whole page, never one per row
        saved_ids = get_saved_job_ids(db, params.user_id, [job.id for job, _ in rows])

    jobs = [
        JobSearchResult(
            job_id=job.id,
            title=job.title,
            location=job.location,
            job_type=job.job_type,
            work_mode=job.work_mode,
            salary_min=job.salary_min,
            salary_max=job.salary_max,
            experience=job.experience,
            company_name=company_name,
            created_at=job.created_at,
            is_saved=(job.id in saved_ids) if params.user_id is not None else None,
        )
        for job, company_name in rows
    ]

    pagination = build_pagination(total_count, page, limit)
    logger.debug(f"Job search matched {total_count} job(s), page {page}/{pagination.total_pages}")

    return JobSearchResponse(jobs=jobs, pagination=pagination)
