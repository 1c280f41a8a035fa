"""
Dashboard aggregation.

Per-company (employer) and platform-wide (admin) statistics built from a
handful of aggregate queries. Plain counts are fused into one SELECT of
scalar sub-queries so they come back in a single round trip.

Assumes RBAC and ownership checks have already been performed.
Status breakdowns always list every status, zeros included.
"""

import enum
import logging
from typing import Iterable, Optional, Type

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from jobboard.core.rbac import Identity
from jobboard.models import Application, ApplicationStatus, Company, Job, JobStatus, Role, User
from jobboard.schemas.dashboard import (
    AdminOverview,
    EmployerJob,
    EmployerOverview,
    JobStats,
    RecentApplication,
)
from jobboard.services.ownership import get_company_for_user

logger = logging.getLogger("dashboard")

RECENT_APPLICATIONS_LIMIT = 5


def complete_status_counts(
    status_enum: Type[enum.Enum],
    rows: Iterable[tuple[enum.Enum, int]],
) -> list[dict]:
    """
    Expand sparse ``(status, count)`` GROUP BY rows to the full status set.

    Statuses absent from ``rows`` are reported with count 0, in the
    declaration order of ``status_enum``.
    """
    counts = {status: count for status, count in rows}
    return [{"status": status, "count": counts.get(status, 0)} for status in status_enum]


def _count(*where, entity=Job.id, join=None):
    stmt = select(func.count(entity))
    if join is not None:
        stmt = stmt.join(*join)
    return stmt.where(*where).correlate(None).scalar_subquery()


def _job_scope(company_id: Optional[int]) -> list:
    return [Job.company_id == company_id] if company_id is not None else []


def get_employer_overview(db: Session, user: Identity) -> EmployerOverview:
    """
    Overview for an employer's company, or for the whole platform (admin).

    Returns:
        Job and application totals, the complete status breakdown and the
        five most recent applications
    """
    company = get_company_for_user(db, user)
    company_id = company.id if company is not None else None
    scope = _job_scope(company_id)
    application_join = (Job, Application.job_id == Job.id)

    totals = db.execute(
        select(
            _count(*scope).label("total_jobs"),
            _count(*scope, Job.status == JobStatus.OPEN).label("open_jobs"),
            _count(*scope, entity=Application.id, join=application_join).label("total_applications"),
        )
    ).one()

    by_status = (
        db.query(Application.status, func.count(Application.id))
        .join(Application.job)
        .filter(*scope)
        .group_by(Application.status)
        .all()
    )

    recent = (
        db.query(Application, Job.title)
        .join(Application.job)
        .filter(*scope)
        .order_by(Application.created_at.desc(), Application.id.desc())
        .limit(RECENT_APPLICATIONS_LIMIT)
        .all()
    )

    return EmployerOverview(
        total_jobs=totals.total_jobs,
        open_jobs=totals.open_jobs,
        total_applications=totals.total_applications,
        applications_by_status=complete_status_counts(ApplicationStatus, by_status),
        recent_applications=[
            RecentApplication(
                application_id=application.id,
                job_id=application.job_id,
                job_title=job_title,
                status=application.status,
                created_at=application.created_at,
            )
            for application, job_title in recent
        ],
    )


def get_employer_jobs(db: Session, user: Identity) -> list[EmployerJob]:
    """Jobs in the caller's scope with their application counts, newest first."""
    company = get_company_for_user(db, user)
    scope = _job_scope(company.id if company is not None else None)

    rows = (
        db.query(Job, func.count(Application.id))
        .outerjoin(Application, Application.job_id == Job.id)
        .filter(*scope)
        .group_by(Job.id)
        .order_by(Job.created_at.desc(), Job.id.desc())
        .all()
    )

    return [
        EmployerJob(
            id=job.id,
            title=job.title,
            status=job.status,
            application_count=application_count,
            created_at=job.created_at,
        )
        for job, application_count in rows
    ]


def get_job_stats(db: Session, job: Job) -> JobStats:
    """
    Statistics for one job.

    ``job`` must come from ``require_job_ownership`` so that access has
    already been checked.
    """
    total, last_application_at = (
        db.query(func.count(Application.id), func.max(Application.created_at))
        .filter(Application.job_id == job.id)
        .one()
    )
    by_status = (
        db.query(Application.status, func.count(Application.id))
        .filter(Application.job_id == job.id)
        .group_by(Application.status)
        .all()
    )

    return JobStats(
        total_applications=total,
        applications_by_status=complete_status_counts(ApplicationStatus, by_status),
        last_application_at=last_application_at,
    )


def get_admin_overview(db: Session) -> AdminOverview:
    """Platform-wide statistics for the admin dashboard."""
    totals = db.execute(
        select(
            _count(entity=User.id).label("total_users"),
            _count(User.role == Role.EMPLOYER, entity=User.id).label("total_employers"),
            _count(entity=Company.id).label("total_companies"),
            _count(entity=Job.id).label("total_jobs"),
            _count(entity=Application.id).label("total_applications"),
        )
    ).one()

    jobs_by_status = db.query(Job.status, func.count(Job.id)).group_by(Job.status).all()
    applications_by_status = (
        db.query(Application.status, func.count(Application.id))
        .group_by(Application.status)
        .all()
    )

    return AdminOverview(
        total_users=totals.total_users,
        total_employers=totals.total_employers,
        total_companies=totals.total_companies,
        total_jobs=totals.total_jobs,
        total_applications=totals.total_applications,
        jobs_by_status=complete_status_counts(JobStatus, jobs_by_status),
        applications_by_status=complete_status_counts(ApplicationStatus, applications_by_status),
    )
