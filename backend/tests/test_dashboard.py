"""
Tests for services/dashboard.py - employer and admin aggregates.
"""

from datetime import timedelta

import pytest

from conftest import identity_of
from jobboard.core.errors import ValidationError
from jobboard.db.base import utcnow
from jobboard.models import Application, ApplicationStatus, JobStatus, Role
from jobboard.services.dashboard import (
    complete_status_counts,
    get_admin_overview,
    get_employer_jobs,
    get_employer_overview,
    get_job_stats,
)


def counts(status_counts):
    return {entry.status: entry.count for entry in status_counts}


@pytest.fixture
def add_application(db_session, make_user):
    def _add(job, status=ApplicationStatus.APPLIED, age_minutes=0):
        candidate = make_user(Role.CANDIDATE)
        created_at = utcnow() - timedelta(minutes=age_minutes)
        application = Application(
            job_id=job.id,
            user_id=candidate.id,
            status=status,
            created_at=created_at,
            updated_at=created_at,
        )
        db_session.add(application)
        db_session.commit()
        return application

    return _add


class TestCompleteStatusCounts:
    def test_missing_statuses_are_zero(self):
        rows = [(ApplicationStatus.HIRED, 2), (ApplicationStatus.APPLIED, 5)]
        result = complete_status_counts(ApplicationStatus, rows)

        assert [entry["status"] for entry in result] == list(ApplicationStatus)
        assert {entry["status"]: entry["count"] for entry in result} == {
            ApplicationStatus.APPLIED: 5,
            ApplicationStatus.REVIEWING: 0,
            ApplicationStatus.SHORTLISTED: 0,
            ApplicationStatus.REJECTED: 0,
            ApplicationStatus.HIRED: 2,
        }

    def test_empty_rows(self):
        result = complete_status_counts(JobStatus, [])
        assert len(result) == len(JobStatus)
        assert all(entry["count"] == 0 for entry in result)


class TestEmployerOverview:
    def test_counts_are_scoped_to_company(self, db_session, make_user, make_company, make_job, add_application):
        owner = make_user(Role.EMPLOYER)
        company = make_company(owner=owner)
        open_job = make_job(company=company, title="Open")
        make_job(company=company, title="Draft", status=JobStatus.DRAFT)
        add_application(open_job, ApplicationStatus.APPLIED)
        add_application(open_job, ApplicationStatus.HIRED)

        other_job = make_job(title="Elsewhere")
        add_application(other_job)

        overview = get_employer_overview(db_session, identity_of(owner))

        assert overview.total_jobs == 2
        assert overview.open_jobs == 1
        assert overview.total_applications == 2
        by_status = counts(overview.applications_by_status)
        assert set(by_status) == set(ApplicationStatus)
        assert by_status[ApplicationStatus.APPLIED] == 1
        assert by_status[ApplicationStatus.HIRED] == 1
        assert by_status[ApplicationStatus.REVIEWING] == 0

    def test_complete_breakdown_with_no_applications(self, db_session, make_user, make_company):
        owner = make_user(Role.EMPLOYER)
        make_company(owner=owner)

        overview = get_employer_overview(db_session, identity_of(owner))

        assert overview.total_jobs == 0
        assert len(overview.applications_by_status) == len(ApplicationStatus)
        assert all(entry.count == 0 for entry in overview.applications_by_status)
        assert overview.recent_applications == []

    def test_recent_applications_newest_five(self, db_session, make_user, make_company, make_job, add_application):
        owner = make_user(Role.EMPLOYER)
        job = make_job(company=make_company(owner=owner), title="Busy")
        created = [add_application(job, age_minutes=age) for age in (50, 40, 30, 20, 10, 5, 1)]

        overview = get_employer_overview(db_session, identity_of(owner))

        assert [r.application_id for r in overview.recent_applications] == [a.id for a in reversed(created)][:5]
        assert overview.recent_applications[0].job_title == "Busy"

    def test_admin_sees_platform(self, db_session, make_user, make_job, add_application):
        add_application(make_job())
        add_application(make_job())
        admin = make_user(Role.ADMIN)

        overview = get_employer_overview(db_session, identity_of(admin))

        assert overview.total_jobs == 2
        assert overview.total_applications == 2

    def test_employer_without_company(self, db_session, make_user):
        with pytest.raises(ValidationError):
            get_employer_overview(db_session, identity_of(make_user(Role.EMPLOYER)))


class TestEmployerJobs:
    def test_application_counts_per_job(self, db_session, make_user, make_company, make_job, add_application):
        owner = make_user(Role.EMPLOYER)
        company = make_company(owner=owner)
        quiet = make_job(company=company, title="Quiet", age_minutes=10)
        busy = make_job(company=company, title="Busy", age_minutes=1)
        add_application(busy)
        add_application(busy)
        add_application(busy)

        jobs = get_employer_jobs(db_session, identity_of(owner))

        assert [(job.title, job.application_count) for job in jobs] == [("Busy", 3), ("Quiet", 0)]
        assert jobs[1].id == quiet.id


class TestJobStats:
    def test_stats(self, db_session, make_job, add_application):
        job = make_job()
        add_application(job, ApplicationStatus.REVIEWING, age_minutes=30)
        latest = add_application(job, ApplicationStatus.REVIEWING, age_minutes=1)

        stats = get_job_stats(db_session, job)

        assert stats.total_applications == 2
        assert counts(stats.applications_by_status)[ApplicationStatus.REVIEWING] == 2
        assert counts(stats.applications_by_status)[ApplicationStatus.HIRED] == 0
        assert stats.last_application_at == latest.created_at

    def test_no_applications(self, db_session, make_job):
        stats = get_job_stats(db_session, make_job())
        assert stats.total_applications == 0
        assert stats.last_application_at is None
        assert len(stats.applications_by_status) == len(ApplicationStatus)


class TestAdminOverview:
    def test_platform_totals(self, db_session, make_user, make_job, add_application):
        job = make_job(status=JobStatus.OPEN)
        make_job(status=JobStatus.CLOSED)
        add_application(job, ApplicationStatus.SHORTLISTED)
        make_user(Role.ADMIN)

        overview = get_admin_overview(db_session)

        # 2 employers (one per job's company), 1 candidate, 1 admin
        assert overview.total_users == 4
        assert overview.total_employers == 2
        assert overview.total_companies == 2
        assert overview.total_jobs == 2
        assert overview.total_applications == 1
        assert counts(overview.jobs_by_status) == {
            JobStatus.DRAFT: 0,
            JobStatus.OPEN: 1,
            JobStatus.CLOSED: 1,
        }
        assert counts(overview.applications_by_status)[ApplicationStatus.SHORTLISTED] == 1
        assert len(overview.applications_by_status) == len(ApplicationStatus)
