"""
Admin API endpoints.

Platform statistics and moderation: activate or deactivate accounts,
verify companies and force-close jobs. Every route requires the ADMIN role.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from jobboard.api.deps import get_admin
from jobboard.core.rbac import Identity
from jobboard.db.session import get_db
from jobboard.models import JobStatus, JobType, Role
from jobboard.schemas.admin import (
    ADMIN_DEFAULT_PAGE_SIZE,
    AdminCompany,
    AdminJob,
    AdminJobList,
    AdminUser,
    AdminUserList,
    CompanyVerifiedUpdate,
    UserActiveUpdate,
)
from jobboard.schemas.dashboard import AdminOverview
from jobboard.services import admin as admin_service
from jobboard.services.dashboard import get_admin_overview

router = APIRouter()


@router.get("/overview", response_model=AdminOverview)
def overview(
    admin: Identity = Depends(get_admin),
    db: Session = Depends(get_db),
):
    return get_admin_overview(db)


@router.get("/users", response_model=AdminUserList)
def list_users(
    role: Optional[Role] = Query(None),
    is_active: Optional[bool] = Query(None, alias="isActive"),
    page: int = Query(1),
    limit: int = Query(ADMIN_DEFAULT_PAGE_SIZE),
    admin: Identity = Depends(get_admin),
    db: Session = Depends(get_db),
):
    return admin_service.list_users(db, role=role, is_active=is_active, page=page, limit=limit)


@router.patch("/users/{user_id}", response_model=AdminUser)
def update_user(
    user_id: int,
    data: UserActiveUpdate,
    admin: Identity = Depends(get_admin),
    db: Session = Depends(get_db),
):
    """Activate or deactivate a user. Deactivation ends all their sessions."""
    return admin_service.set_user_active(db, user_id, data.is_active, acting_admin_id=admin.id)


@router.get("/companies", response_model=list[AdminCompany])
def list_companies(
    admin: Identity = Depends(get_admin),
    db: Session = Depends(get_db),
):
    return admin_service.list_companies(db)


@router.patch("/companies/{company_id}", response_model=AdminCompany)
def update_company(
    company_id: int,
    data: CompanyVerifiedUpdate,
    admin: Identity = Depends(get_admin),
    db: Session = Depends(get_db),
):
    return admin_service.set_company_verified(db, company_id, data.is_verified)


@router.get("/jobs", response_model=AdminJobList)
def list_jobs(
    job_status: Optional[JobStatus] = Query(None, alias="status"),
    job_type: Optional[JobType] = Query(None, alias="jobType"),
    page: int = Query(1),
    limit: int = Query(ADMIN_DEFAULT_PAGE_SIZE),
    admin: Identity = Depends(get_admin),
    db: Session = Depends(get_db),
):
    return admin_service.list_jobs(db, status=job_status, job_type=job_type, page=page, limit=limit)


@router.post("/jobs/{job_id}/close", response_model=AdminJob)
def close_job(
    job_id: int,
    admin: Identity = Depends(get_admin),
    db: Session = Depends(get_db),
):
    return admin_service.force_close_job(db, job_id)
