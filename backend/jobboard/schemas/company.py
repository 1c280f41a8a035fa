from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from jobboard.models import CompanyType
from jobboard.schemas.search import Pagination


class CompanyUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = Field(None, min_length=2, max_length=200)
    description: Optional[str] = Field(None, max_length=5000)
    website: Optional[str] = Field(None, max_length=500)
    location: Optional[str] = Field(None, max_length=200)
    logo_url: Optional[str] = Field(None, max_length=500)
    company_type: Optional[CompanyType] = None
    size: Optional[str] = Field(None, max_length=50)

    @field_validator("website", "logo_url")
    @classmethod
    def check_url(cls, v: Optional[str]) -> Optional[str]:
        if v and not v.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        return v or None


class CompanyResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    logo_url: Optional[str] = None
    company_type: Optional[CompanyType] = None
    size: Optional[str] = None
    is_verified: bool
    created_at: datetime


class PublicCompanyResponse(CompanyResponse):
    open_jobs: int = 0


class CompanyListItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    logo_url: Optional[str] = None
    location: Optional[str] = None
    company_type: Optional[CompanyType] = None


class CompanyDirectoryResponse(BaseModel):
    companies: list[CompanyListItem]
    pagination: Pagination


class CompanyLocationCount(BaseModel):
    location: str
    count: int
