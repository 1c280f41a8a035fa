"""
Application service.

Business logic for job applications. Assumes RBAC and ownership checks
have already been performed.

Duplicate applications are refused twice over: a read before the insert
gives the usual fast answer, and the (job_id, user_id) unique constraint
settles concurrent submissions. Both paths raise the same
``DuplicateApplicationError``.
"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from jobboard.core.errors import DuplicateApplicationError, NotFoundError, ValidationError
from jobboard.core.rbac import Identity
from jobboard.models import Application, ApplicationStatus, Job, JobStatus, User
from jobboard.schemas.application import (
    MAX_COVER_NOTE_LENGTH,
    ApplicantResponse,
    ApplicantDetail,
    ApplicationDetailResponse,
    ApplicationResponse,
)

logger = logging.getLogger("applications")

# APPLIED -> REVIEWING -> SHORTLISTED -> REJECTED | HIRED
VALID_TRANSITIONS: dict[ApplicationStatus, set[ApplicationStatus]] = {
    ApplicationStatus.APPLIED: {ApplicationStatus.REVIEWING, ApplicationStatus.REJECTED},
    ApplicationStatus.REVIEWING: {ApplicationStatus.SHORTLISTED, ApplicationStatus.REJECTED},
    ApplicationStatus.SHORTLISTED: {ApplicationStatus.REJECTED, ApplicationStatus.HIRED},
    ApplicationStatus.REJECTED: set(),
    ApplicationStatus.HIRED: set(),
}


def validate_status_transition(current: ApplicationStatus, new: ApplicationStatus) -> None:
    if current == new:
        raise ValidationError("Application status is already set to this value")

    allowed = VALID_TRANSITIONS[current]
    if new not in allowed:
        allowed_names = ", ".join(sorted(s.value for s in allowed)) or "none (terminal state)"
        raise ValidationError(
            f"Invalid status transition from {current.value} to {new.value}. "
            f"Allowed transitions: {allowed_names}"
        )


def _clean_cover_note(cover_note: Optional[str]) -> Optional[str]:
    if cover_note is None:
        return None
    if not cover_note.strip():
        raise ValidationError("Cover note cannot be empty")
    if len(cover_note) > MAX_COVER_NOTE_LENGTH:
        raise ValidationError(f"Cover note must not exceed {MAX_COVER_NOTE_LENGTH} characters")
    return cover_note.strip()


def find_existing_application(db: Session, job_id: int, user_id: int) -> Optional[Application]:
    return (
        db.query(Application)
        .filter(Application.job_id == job_id, Application.user_id == user_id)
        .first()
    )


def _to_response(application: Application) -> ApplicationResponse:
    job = application.job
    return ApplicationResponse(
        id=application.id,
        job_id=job.id,
        job_title=job.title,
        job_status=job.status,
        company_name=job.company.name,
        status=application.status,
        cover_note=application.cover_note,
        created_at=application.created_at,
    )


def apply_to_job(
    db: Session,
    user: Identity,
    job_id: int,
    cover_note: Optional[str] = None,
) -> ApplicationResponse:
    """
    Apply to an open job.

    Raises:
        NotFoundError: the job does not exist
        ValidationError: the job is not open, or the cover note is invalid
        DuplicateApplicationError: the user already applied
    """
    cover_note = _clean_cover_note(cover_note)

    job = db.query(Job).options(joinedload(Job.company)).filter(Job.id == job_id).first()
    if job is None:
        raise NotFoundError("Job not found")

    if job.status != JobStatus.OPEN:
        raise ValidationError("This job is not currently accepting applications")

    # Advisory only, see module docstring
    if find_existing_application(db, job_id, user.id) is not None:
        raise DuplicateApplicationError()

    application = Application(
        job_id=job_id,
        user_id=user.id,
        cover_note=cover_note,
        status=ApplicationStatus.APPLIED,
    )
    db.add(application)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info(f"Concurrent duplicate application: user={user.id} job={job_id}")
        raise DuplicateApplicationError()

    logger.info(f"User {user.id} applied to job {job_id}")
    application.job = job
    return _to_response(application)


def get_user_applications(db: Session, user: Identity) -> list[ApplicationResponse]:
    applications = (
        db.query(Application)
        .options(joinedload(Application.job).joinedload(Job.company))
        .filter(Application.user_id == user.id)
        .order_by(Application.created_at.desc(), Application.id.desc())
        .all()
    )
    return [_to_response(application) for application in applications]


def _to_applicant(application: Application) -> ApplicantResponse:
    applicant: User = application.user
    profile = applicant.profile
    return ApplicantResponse(
        id=application.id,
        job_id=application.job_id,
        job_title=application.job.title,
        user_id=applicant.id,
        email=applicant.email,
        full_name=profile.full_name if profile else None,
        experience=profile.experience if profile else None,
        status=application.status,
        cover_note=application.cover_note,
        created_at=application.created_at,
        updated_at=application.updated_at,
    )


def get_job_applications(db: Session, job: Job) -> list[ApplicantResponse]:
    """Applications for a job returned by ``require_job_ownership``."""
    applications = (
        db.query(Application)
        .options(
            joinedload(Application.user).joinedload(User.profile),
            joinedload(Application.job),
        )
        .filter(Application.job_id == job.id)
        .order_by(Application.created_at.desc(), Application.id.desc())
        .all()
    )
    return [_to_applicant(application) for application in applications]


def get_application_detail(db: Session, application: Application) -> ApplicationDetailResponse:
    """
    Applicant profile behind one application.

    ``application`` must come from ``require_application_access``.
    """
    applicant = (
        db.query(User)
        .options(joinedload(User.profile))
        .filter(User.id == application.user_id)
        .one()
    )
    return ApplicationDetailResponse(
        id=application.id,
        job_id=application.job_id,
        job_title=application.job.title,
        status=application.status,
        cover_note=application.cover_note,
        created_at=application.created_at,
        applicant=ApplicantDetail.model_validate(applicant),
    )


def update_application_status(
    db: Session,
    application: Application,
    new_status: ApplicationStatus,
) -> ApplicantResponse:
    """
    Move an application along the hiring workflow.

    ``application`` must come from ``require_application_access``.
    """
    validate_status_transition(application.status, new_status)

    previous = application.status
    application.status = new_status
    db.commit()
    db.refresh(application)

    logger.info(f"Application {application.id} status {previous.value} -> {new_status.value}")
    return _to_applicant(application)
