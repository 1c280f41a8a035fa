"""
Ownership-based authorization guards.

Layered on top of the RBAC guards: call ``require_employer`` (or another
role guard) first, then one of these. Each guard loads the resource
together with its owner chain in a single query and returns it, so the
business logic does not need to fetch it again.

Admins pass every ownership check for resources that exist. Missing
resources and resources owned by another company raise the same
``OwnershipDenied``; only the logged reason tells them apart.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session, contains_eager

from jobboard.core.errors import OwnershipDenied, OwnershipFailure, ValidationError
from jobboard.core.rbac import Identity, has_role
from jobboard.models import Application, Company, Job, Role

logger = logging.getLogger("ownership")


def _deny(user: Identity, resource: str, resource_id: int, reason: OwnershipFailure) -> OwnershipDenied:
    logger.warning(
        f"Ownership check failed: user={user.id} role={user.role.value} "
        f"{resource.lower()}={resource_id} reason={reason.value}"
    )
    return OwnershipDenied(resource, resource_id, reason)


def _check_owner(user: Identity, owner_id: int, resource: str, resource_id: int) -> None:
    if has_role(user, Role.ADMIN):
        return
    if owner_id != user.id:
        raise _deny(user, resource, resource_id, OwnershipFailure.NOT_OWNER)


def require_job_ownership(db: Session, user: Identity, job_id: int) -> Job:
    """
    Require that ``user`` owns the job through its company, or is an admin.

    Returns:
        The job, with ``job.company`` loaded

    Raises:
        OwnershipDenied: job missing or owned by another company
    """
    job = (
        db.query(Job)
        .join(Job.company)
        .options(contains_eager(Job.company))
        .filter(Job.id == job_id)
        .first()
    )
    if job is None:
        raise _deny(user, "Job", job_id, OwnershipFailure.RESOURCE_MISSING)

    _check_owner(user, job.company.owner_id, "Job", job_id)
    return job


def require_company_ownership(db: Session, user: Identity, company_id: int) -> Company:
    company = db.query(Company).filter(Company.id == company_id).first()
    if company is None:
        raise _deny(user, "Company", company_id, OwnershipFailure.RESOURCE_MISSING)

    _check_owner(user, company.owner_id, "Company", company_id)
    return company


def require_application_access(db: Session, user: Identity, application_id: int) -> Application:
    """
    Require that ``user`` owns the job an application was made to.

    Walks Application -> Job -> Company -> owner in one query.
    """
    application = (
        db.query(Application)
        .join(Application.job)
        .join(Job.company)
        .options(contains_eager(Application.job).contains_eager(Job.company))
        .filter(Application.id == application_id)
        .first()
    )
    if application is None:
        raise _deny(user, "Application", application_id, OwnershipFailure.RESOURCE_MISSING)

    _check_owner(user, application.job.company.owner_id, "Application", application_id)
    return application


def get_company_for_user(db: Session, user: Identity) -> Optional[Company]:
    """
    Company scope of an employer-side request.

    Returns:
        None for admins (no scope), the owned company for employers

    Raises:
        ValidationError: the employer has not created a company profile yet
    """
    if has_role(user, Role.ADMIN):
        return None

    company = db.query(Company).filter(Company.owner_id == user.id).first()
    if company is None:
        # Kept as a 400: it is a setup step the employer has not finished
        raise ValidationError("Company profile not found. Please create a company profile first.")
    return company
