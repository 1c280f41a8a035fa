"""
Admin moderation.

User activation, company verification and forced job closure. Callers
must have passed ``require_admin``.
"""

import logging
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from jobboard.core.errors import NotFoundError, ValidationError
from jobboard.models import Company, Job, JobStatus, JobType, Role, User
from jobboard.schemas.admin import (
    ADMIN_DEFAULT_PAGE_SIZE,
    ADMIN_MAX_PAGE_SIZE,
    AdminCompany,
    AdminJob,
    AdminJobList,
    AdminUser,
    AdminUserList,
)
from jobboard.services.sessions import delete_all_sessions_for_user

logger = logging.getLogger("admin")


def _page_window(page: int, limit: int) -> tuple[int, int]:
    page = max(1, page)
    limit = min(max(1, limit), ADMIN_MAX_PAGE_SIZE)
    return page, limit


def _to_admin_user(user: User) -> AdminUser:
    return AdminUser(
        id=user.id,
        email=user.email,
        role=user.role,
        is_active=user.is_active,
        full_name=user.profile.full_name if user.profile else None,
        created_at=user.created_at,
    )


def list_users(
    db: Session,
    role: Optional[Role] = None,
    is_active: Optional[bool] = None,
    page: int = 1,
    limit: int = ADMIN_DEFAULT_PAGE_SIZE,
) -> AdminUserList:
    page, limit = _page_window(page, limit)

    query = db.query(User)
    if role is not None:
        query = query.filter(User.role == role)
    if is_active is not None:
        query = query.filter(User.is_active == is_active)

    total = query.count()
    users = (
        query.options(joinedload(User.profile))
        .order_by(User.created_at.desc(), User.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return AdminUserList(total=total, page=page, limit=limit, users=[_to_admin_user(u) for u in users])


def set_user_active(
    db: Session,
    user_id: int,
    is_active: bool,
    acting_admin_id: Optional[int] = None,
) -> AdminUser:
    """
    Activate or deactivate an account.

    Deactivation also deletes every session of the user, in the same
    transaction.
    """
    if user_id == acting_admin_id and not is_active:
        raise ValidationError("You cannot deactivate your own account")

    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise NotFoundError("User not found")

    user.is_active = is_active
    if not is_active:
        delete_all_sessions_for_user(db, user_id, commit=False)
    db.commit()
    db.refresh(user)

    logger.info(f"Admin {acting_admin_id} set user {user_id} is_active={is_active}")
    return _to_admin_user(user)


def _to_admin_company(company: Company, owner_email: str, job_count: int) -> AdminCompany:
    return AdminCompany(
        id=company.id,
        name=company.name,
        owner_id=company.owner_id,
        owner_email=owner_email,
        is_verified=company.is_verified,
        job_count=job_count,
        created_at=company.created_at,
    )


def list_companies(db: Session) -> list[AdminCompany]:
    rows = (
        db.query(Company, User.email, func.count(Job.id))
        .join(User, User.id == Company.owner_id)
        .outerjoin(Job, Job.company_id == Company.id)
        .group_by(Company.id, User.email)
        .order_by(Company.created_at.desc())
        .all()
    )
    return [_to_admin_company(company, email, job_count) for company, email, job_count in rows]


def set_company_verified(db: Session, company_id: int, is_verified: bool) -> AdminCompany:
    company = db.query(Company).filter(Company.id == company_id).first()
    if company is None:
        raise NotFoundError("Company not found")

    company.is_verified = is_verified
    db.commit()
    db.refresh(company)

    job_count = db.query(func.count(Job.id)).filter(Job.company_id == company_id).scalar()
    logger.info(f"Company {company_id} is_verified={is_verified}")
    return _to_admin_company(company, company.owner.email, job_count)


def _to_admin_job(job: Job) -> AdminJob:
    return AdminJob(
        id=job.id,
        title=job.title,
        company_id=job.company_id,
        company_name=job.company.name,
        job_type=job.job_type,
        status=job.status,
        created_at=job.created_at,
    )


def list_jobs(
    db: Session,
    status: Optional[JobStatus] = None,
    job_type: Optional[JobType] = None,
    page: int = 1,
    limit: int = ADMIN_DEFAULT_PAGE_SIZE,
) -> AdminJobList:
    page, limit = _page_window(page, limit)

    query = db.query(Job)
    if status is not None:
        query = query.filter(Job.status == status)
    if job_type is not None:
        query = query.filter(Job.job_type == job_type)

    total = query.count()
    jobs = (
        query.options(joinedload(Job.company))
        .order_by(Job.created_at.desc(), Job.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return AdminJobList(total=total, page=page, limit=limit, jobs=[_to_admin_job(j) for j in jobs])


def force_close_job(db: Session, job_id: int) -> AdminJob:
    job = db.query(Job).options(joinedload(Job.company)).filter(Job.id == job_id).first()
    if job is None:
        raise NotFoundError("Job not found")

    if job.status != JobStatus.CLOSED:
        job.status = JobStatus.CLOSED
        db.commit()
        db.refresh(job)
        logger.info(f"Job {job_id} force-closed by admin")
    return _to_admin_job(job)
