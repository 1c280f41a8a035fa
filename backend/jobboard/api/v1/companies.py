from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from jobboard.db.session import get_db
from jobboard.models import CompanyType
from jobboard.schemas.company import CompanyDirectoryResponse, CompanyLocationCount, PublicCompanyResponse
from jobboard.schemas.search import DEFAULT_PAGE_SIZE, MAX_TEXT_FILTER_LENGTH
from jobboard.services import companies as company_service

router = APIRouter()


@router.get("", response_model=CompanyDirectoryResponse)
def list_companies(
    search: Optional[str] = Query(None, max_length=MAX_TEXT_FILTER_LENGTH),
    location: list[str] = Query([]),
    company_type: Optional[CompanyType] = Query(None, alias="type"),
    page: int = Query(1),
    limit: int = Query(DEFAULT_PAGE_SIZE),
    db: Session = Depends(get_db),
):
    """Public company directory. Repeat ``location`` to match any of several."""
    return company_service.list_public_companies(db, search, location, company_type, page, limit)


@router.get("/locations", response_model=list[CompanyLocationCount])
def list_locations(db: Session = Depends(get_db)):
    return company_service.get_company_locations(db)


@router.get("/{company_id}", response_model=PublicCompanyResponse)
def get_company(company_id: int, db: Session = Depends(get_db)):
    """Public company profile with its number of open jobs."""
    return company_service.get_public_company(db, company_id)
