import logging
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from jobboard.core.errors import NotFoundError, ValidationError
from jobboard.core.rbac import Identity
from jobboard.models import Company, CompanyType, Job, JobStatus
from jobboard.schemas.company import (
    CompanyDirectoryResponse,
    CompanyListItem,
    CompanyLocationCount,
    CompanyResponse,
    CompanyUpdate,
    PublicCompanyResponse,
)
from jobboard.services.job_search import build_pagination, clamp_pagination
from jobboard.services.ownership import get_company_for_user

logger = logging.getLogger("companies")


def get_own_company(db: Session, user: Identity) -> Company:
    """The employer's company. Admins have none and get a ValidationError."""
    company = get_company_for_user(db, user)
    if company is None:
        raise ValidationError("Admins do not own a company profile")
    return company


def update_company(db: Session, company: Company, data: CompanyUpdate) -> CompanyResponse:
    """Apply a partial update to a company returned by ``require_company_ownership``."""
    changes = data.model_dump(exclude_unset=True)
    if "name" in changes and changes["name"] is None:
        raise ValidationError("name cannot be null")

    for field, value in changes.items():
        setattr(company, field, value)

    db.commit()
    db.refresh(company)
    logger.info(f"Company {company.id} updated: {sorted(changes)}")
    return CompanyResponse.model_validate(company)


def get_public_company(db: Session, company_id: int) -> PublicCompanyResponse:
    company = db.query(Company).filter(Company.id == company_id).first()
    if company is None:
        raise NotFoundError("Company not found")

    open_jobs = (
        db.query(func.count(Job.id))
        .filter(Job.company_id == company_id, Job.status == JobStatus.OPEN)
        .scalar()
    )
    return PublicCompanyResponse(
        **CompanyResponse.model_validate(company).model_dump(),
        open_jobs=open_jobs,
    )


def list_public_companies(
    db: Session,
    search: Optional[str] = None,
    locations: Optional[list[str]] = None,
    company_type: Optional[CompanyType] = None,
    page: Optional[int] = None,
    limit: Optional[int] = None,
) -> CompanyDirectoryResponse:
    """
    Company directory, ordered by name.

    Filters are ANDed together; several locations match a company in any
    of them. Page and limit are clamped like job search.
    """
    page, limit = clamp_pagination(page, limit)

    query = db.query(Company)
    if search and search.strip():
        query = query.filter(Company.name.icontains(search.strip(), autoescape=True))

    locations = [location.strip() for location in locations or [] if location and location.strip()]
    if locations:
        query = query.filter(Company.location.in_(locations))

    if company_type is not None:
        query = query.filter(Company.company_type == company_type)

    total_count = query.count()
    companies = (
        query.order_by(Company.name.asc(), Company.id.asc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return CompanyDirectoryResponse(
        companies=[CompanyListItem.model_validate(company) for company in companies],
        pagination=build_pagination(total_count, page, limit),
    )


def get_company_locations(db: Session) -> list[CompanyLocationCount]:
    """Distinct company locations with their company counts, most common first."""
    count = func.count(Company.id)
    rows = (
        db.query(Company.location, count)
        .filter(Company.location.is_not(None), func.trim(Company.location) != "")
        .group_by(Company.location)
        .order_by(count.desc(), Company.location.asc())
        .all()
    )
    return [CompanyLocationCount(location=location, count=n) for location, n in rows]
