"""
Tests for seed_db.py - demo data.
"""

from seed_db import CANDIDATE_EMAIL, EMPLOYER_EMAIL, seed_database
from jobboard.models import Job, JobStatus, User
from jobboard.schemas.search import JobSearchParams
from jobboard.services.job_search import search_jobs


class TestSeedDatabase:
    def test_seeds_once(self, db_session, settings):
        assert seed_database(db_session, settings) is True
        assert seed_database(db_session, settings) is False
        assert db_session.query(User).filter(User.email == EMPLOYER_EMAIL).count() == 1

    def test_seeded_jobs_cover_every_status(self, db_session, settings):
        seed_database(db_session, settings)
        statuses = {status for (status,) in db_session.query(Job.status).all()}
        assert statuses == set(JobStatus)

    def test_candidate_sees_saved_flag(self, db_session, settings):
        seed_database(db_session, settings)
        candidate = db_session.query(User).filter(User.email == CANDIDATE_EMAIL).one()

        result = search_jobs(db_session, JobSearchParams(user_id=candidate.id))

        assert result.pagination.total_count == 2
        assert [job.is_saved for job in result.jobs].count(True) == 1
