import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobboard.core.errors import NotFoundError
from jobboard.core.rbac import Identity
from jobboard.models import Job, JobStatus, SavedJob

logger = logging.getLogger("saved_jobs")


def get_saved_job_ids(db: Session, user_id: int, job_ids: Optional[list[int]] = None) -> set[int]:
    """IDs of the jobs ``user_id`` saved, optionally narrowed to ``job_ids`` in one query."""
    if job_ids is not None and not job_ids:
        return set()
    query = db.query(SavedJob.job_id).filter(SavedJob.user_id == user_id)
    if job_ids is not None:
        query = query.filter(SavedJob.job_id.in_(job_ids))
    return {job_id for (job_id,) in query.all()}


def is_job_saved(db: Session, user_id: int, job_id: int) -> bool:
    return (
        db.query(SavedJob.id)
        .filter(SavedJob.user_id == user_id, SavedJob.job_id == job_id)
        .first()
        is not None
    )


def toggle_saved_job(db: Session, user: Identity, job_id: int) -> bool:
    """
    Bookmark an open job, or remove an existing bookmark.

    Returns:
        True if the job is saved after the call
    """
    saved = (
        db.query(SavedJob)
        .filter(SavedJob.user_id == user.id, SavedJob.job_id == job_id)
        .first()
    )
    if saved is not None:
        db.delete(saved)
        db.commit()
        logger.info(f"User {user.id} unsaved job {job_id}")
        return False

    job = db.query(Job.id).filter(Job.id == job_id, Job.status == JobStatus.OPEN).first()
    if job is None:
        raise NotFoundError("Job not found")

    db.add(SavedJob(user_id=user.id, job_id=job_id))
    try:
        db.commit()
    except IntegrityError:
        # Saved by a concurrent request
        db.rollback()
    logger.info(f"User {user.id} saved job {job_id}")
    return True
