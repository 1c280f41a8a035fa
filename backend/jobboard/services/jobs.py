"""
Job management.

Create, edit and delete postings on the employer side, and the public
detail view. Assumes RBAC and ownership checks have already been
performed: ``update_job`` and ``delete_job`` take the job returned by
``require_job_ownership``.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session, joinedload

from jobboard.core.errors import NotFoundError, ValidationError
from jobboard.core.rbac import Identity
from jobboard.models import Company, Job, JobStatus
from jobboard.schemas.job import SALARY_RANGE_MESSAGE, JobCreate, JobDetail, JobUpdate
from jobboard.services.ownership import get_company_for_user

logger = logging.getLogger("jobs")


def to_job_detail(job: Job, is_saved: Optional[bool] = None) -> JobDetail:
    return JobDetail(
        id=job.id,
        title=job.title,
        description=job.description,
        job_type=job.job_type,
        work_mode=job.work_mode,
        location=job.location,
        salary_min=job.salary_min,
        salary_max=job.salary_max,
        experience=job.experience,
        status=job.status,
        company_id=job.company_id,
        company_name=job.company.name,
        created_at=job.created_at,
        updated_at=job.updated_at,
        is_saved=is_saved,
    )


def create_job(db: Session, user: Identity, data: JobCreate, company_id: Optional[int] = None) -> JobDetail:
    """
    Create a posting for the employer's company.

    Admins have no company of their own and must name one with
    ``company_id``.
    """
    company = get_company_for_user(db, user)
    if company is None:
        if company_id is None:
            raise ValidationError("company_id is required when posting as an admin")
        company = db.query(Company).filter(Company.id == company_id).first()
        if company is None:
            raise NotFoundError("Company not found")

    job = Job(company_id=company.id, **data.model_dump())
    db.add(job)
    db.commit()
    db.refresh(job)

    logger.info(f"Job {job.id} created for company {company.id} by user {user.id}")
    return to_job_detail(job)


def update_job(db: Session, job: Job, data: JobUpdate) -> JobDetail:
    changes = data.model_dump(exclude_unset=True)

    # Check the range that will be stored, not only the submitted halves
    salary_min = changes.get("salary_min", job.salary_min)
    salary_max = changes.get("salary_max", job.salary_max)
    if salary_min is not None and salary_max is not None and salary_max < salary_min:
        raise ValidationError(SALARY_RANGE_MESSAGE)

    for field, value in changes.items():
        if value is None and field not in ("salary_min", "salary_max", "experience"):
            raise ValidationError(f"{field} cannot be null")
        setattr(job, field, value)

    db.commit()
    db.refresh(job)

    logger.info(f"Job {job.id} updated: {sorted(changes)}")
    return to_job_detail(job)


def delete_job(db: Session, job: Job) -> None:
    job_id = job.id
    db.delete(job)
    db.commit()
    logger.info(f"Job {job_id} deleted")


def get_public_job(db: Session, job_id: int) -> Job:
    """
    Load an open job for the public detail page.

    Drafts and closed jobs are reported as missing.
    """
    job = (
        db.query(Job)
        .options(joinedload(Job.company))
        .filter(Job.id == job_id, Job.status == JobStatus.OPEN)
        .first()
    )
    if job is None:
        raise NotFoundError("Job not found")
    return job
