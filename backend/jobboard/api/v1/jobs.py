"""
Public job endpoints.

Search and detail are open to everyone; applying and saving need a
candidate session, listing applicants needs the owning employer.
"""

from typing import Optional

import pydantic
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from jobboard.api.deps import get_candidate, get_current_user, get_employer
from jobboard.api.errors import first_error_message
from jobboard.core.errors import ValidationError
from jobboard.core.rbac import Identity, require_candidate
from jobboard.db.session import get_db
from jobboard.schemas.application import ApplicantResponse, ApplicationResponse, ApplyRequest
from jobboard.schemas.job import JobDetail
from jobboard.schemas.search import DEFAULT_PAGE_SIZE, JobSearchQuery, JobSearchResponse
from jobboard.services import applications as application_service
from jobboard.services import jobs as job_service
from jobboard.services.job_search import search_jobs
from jobboard.services.ownership import require_job_ownership
from jobboard.services.saved_jobs import is_job_saved, toggle_saved_job

router = APIRouter()


@router.get("", response_model=JobSearchResponse)
def search(
    query: Optional[str] = Query(None),
    location: Optional[str] = Query(None),
    job_type: Optional[str] = Query(None, alias="jobType"),
    min_salary: Optional[int] = Query(None, alias="minSalary"),
    max_salary: Optional[int] = Query(None, alias="maxSalary"),
    experience: Optional[int] = Query(None),
    sort: Optional[str] = Query(None),
    page: int = Query(1),
    limit: int = Query(DEFAULT_PAGE_SIZE),
    saved_only: bool = Query(False, alias="savedOnly"),
    user: Optional[Identity] = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Search open jobs.

    ``savedOnly`` restricts the results to the caller's saved jobs and
    needs a candidate session.
    """
    try:
        search_query = JobSearchQuery(
            query=query,
            location=location,
            job_type=job_type or None,
            min_salary=min_salary,
            max_salary=max_salary,
            experience=experience,
            sort=sort or "newest",
            page=page,
            limit=limit,
            saved_only=saved_only,
        )
    except pydantic.ValidationError as e:
        raise ValidationError(first_error_message(e.errors()))

    if search_query.saved_only:
        require_candidate(user)

    return search_jobs(db, search_query.to_params(user.id if user is not None else None))


@router.get("/{job_id}", response_model=JobDetail)
def get_job(
    job_id: int,
    user: Optional[Identity] = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    job = job_service.get_public_job(db, job_id)
    is_saved = is_job_saved(db, user.id, job.id) if user is not None else None
    return job_service.to_job_detail(job, is_saved=is_saved)


@router.post("/{job_id}/applications", response_model=ApplicationResponse, status_code=status.HTTP_201_CREATED)
def apply(
    job_id: int,
    data: Optional[ApplyRequest] = None,
    user: Identity = Depends(get_candidate),
    db: Session = Depends(get_db),
):
    cover_note = data.cover_note if data is not None else None
    return application_service.apply_to_job(db, user, job_id, cover_note)


@router.get("/{job_id}/applications", response_model=list[ApplicantResponse])
def list_applicants(
    job_id: int,
    user: Identity = Depends(get_employer),
    db: Session = Depends(get_db),
):
    job = require_job_ownership(db, user, job_id)
    return application_service.get_job_applications(db, job)


@router.post("/{job_id}/save")
def toggle_save(
    job_id: int,
    user: Identity = Depends(get_candidate),
    db: Session = Depends(get_db),
):
    saved = toggle_saved_job(db, user, job_id)
    return {"job_id": job_id, "saved": saved}
