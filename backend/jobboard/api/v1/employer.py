"""
Employer dashboard API endpoints.

Company-scoped views and job management for recruiters. Admins reach the
same endpoints with platform-wide scope.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from jobboard.api.deps import get_employer
from jobboard.core.rbac import Identity
from jobboard.db.session import get_db
from jobboard.schemas.company import CompanyResponse, CompanyUpdate
from jobboard.schemas.dashboard import EmployerJob, EmployerOverview, JobStats
from jobboard.schemas.job import JobCreate, JobDetail, JobUpdate
from jobboard.services import companies as company_service
from jobboard.services import dashboard as dashboard_service
from jobboard.services import jobs as job_service
from jobboard.services.ownership import require_company_ownership, require_job_ownership

router = APIRouter()


# ============== Dashboard ==============


@router.get("/overview", response_model=EmployerOverview)
def get_overview(
    user: Identity = Depends(get_employer),
    db: Session = Depends(get_db),
):
    return dashboard_service.get_employer_overview(db, user)


@router.get("/jobs", response_model=list[EmployerJob])
def list_jobs(
    user: Identity = Depends(get_employer),
    db: Session = Depends(get_db),
):
    return dashboard_service.get_employer_jobs(db, user)


@router.get("/jobs/{job_id}/stats", response_model=JobStats)
def get_job_stats(
    job_id: int,
    user: Identity = Depends(get_employer),
    db: Session = Depends(get_db),
):
    job = require_job_ownership(db, user, job_id)
    return dashboard_service.get_job_stats(db, job)


# ============== Job management ==============


@router.post("/jobs", response_model=JobDetail, status_code=status.HTTP_201_CREATED)
def create_job(
    data: JobCreate,
    company_id: Optional[int] = Query(None, alias="companyId"),
    user: Identity = Depends(get_employer),
    db: Session = Depends(get_db),
):
    """Create a job for the caller's company. Admins pass ``companyId``."""
    return job_service.create_job(db, user, data, company_id=company_id)


@router.patch("/jobs/{job_id}", response_model=JobDetail)
def update_job(
    job_id: int,
    data: JobUpdate,
    user: Identity = Depends(get_employer),
    db: Session = Depends(get_db),
):
    job = require_job_ownership(db, user, job_id)
    return job_service.update_job(db, job, data)


@router.delete("/jobs/{job_id}")
def delete_job(
    job_id: int,
    user: Identity = Depends(get_employer),
    db: Session = Depends(get_db),
):
    job = require_job_ownership(db, user, job_id)
    job_service.delete_job(db, job)
    return {"message": "Job deleted successfully"}


# ============== Company profile ==============


@router.get("/company", response_model=CompanyResponse)
def get_company(
    user: Identity = Depends(get_employer),
    db: Session = Depends(get_db),
):
    return company_service.get_own_company(db, user)


@router.put("/company", response_model=CompanyResponse)
def update_company(
    data: CompanyUpdate,
    user: Identity = Depends(get_employer),
    db: Session = Depends(get_db),
):
    own = company_service.get_own_company(db, user)
    company = require_company_ownership(db, user, own.id)
    return company_service.update_company(db, company, data)
