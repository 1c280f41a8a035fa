from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobboard.api.deps import get_candidate, get_employer
from jobboard.core.rbac import Identity
from jobboard.db.session import get_db
from jobboard.schemas.application import (
    ApplicantResponse,
    ApplicationDetailResponse,
    ApplicationResponse,
    StatusUpdateRequest,
)
from jobboard.services import applications as application_service
from jobboard.services.ownership import require_application_access

router = APIRouter()


@router.get("", response_model=list[ApplicationResponse])
def list_my_applications(
    user: Identity = Depends(get_candidate),
    db: Session = Depends(get_db),
):
    """Applications made by the calling candidate, newest first."""
    return application_service.get_user_applications(db, user)


@router.get("/{application_id}", response_model=ApplicationDetailResponse)
def get_application(
    application_id: int,
    user: Identity = Depends(get_employer),
    db: Session = Depends(get_db),
):
    """Applicant profile for the employer who owns the job."""
    application = require_application_access(db, user, application_id)
    return application_service.get_application_detail(db, application)


@router.patch("/{application_id}/status", response_model=ApplicantResponse)
def update_status(
    application_id: int,
    data: StatusUpdateRequest,
    user: Identity = Depends(get_employer),
    db: Session = Depends(get_db),
):
    application = require_application_access(db, user, application_id)
    return application_service.update_application_status(db, application, data.status)
