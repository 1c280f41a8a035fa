"""
Pytest configuration and shared fixtures.

Every test gets a fresh in-memory SQLite database behind a freshly built
app. Factories commit what they create so that requests made through the
test client see it.
"""

from datetime import timedelta
from typing import Optional

import pytest
from fastapi.testclient import TestClient

from jobboard.core.config import Settings
from jobboard.core.rbac import Identity
from jobboard.core.security import get_password_hash
from jobboard.db.base import Base, utcnow
from jobboard.main import create_app
from jobboard.models import Company, Job, JobStatus, JobType, Profile, Role, User, WorkMode

PASSWORD = "password123"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        DATABASE_URL="sqlite://",
        APP_ENV="test",
        BCRYPT_ROUNDS=4,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def app(settings):
    app = create_app(settings)
    Base.metadata.create_all(bind=app.state.engine)
    yield app
    Base.metadata.drop_all(bind=app.state.engine)
    app.state.engine.dispose()


@pytest.fixture
def db_session(app):
    session = app.state.session_factory()
    yield session
    session.close()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def make_user(db_session):
    """Create a user with a profile. Returns the ORM object."""
    counter = {"n": 0}

    def _make_user(
        role: Role = Role.CANDIDATE,
        email: Optional[str] = None,
        password: str = PASSWORD,
        is_active: bool = True,
        full_name: str = "Test User",
        experience: int = 0,
    ) -> User:
        counter["n"] += 1
        user = User(
            email=email or f"{role.value.lower()}{counter['n']}@example.com",
            hashed_password=get_password_hash(password, rounds=4),
            role=role,
            is_active=is_active,
        )
        db_session.add(user)
        db_session.flush()
        db_session.add(Profile(user_id=user.id, full_name=full_name, experience=experience))
        db_session.commit()
        return user

    return _make_user


@pytest.fixture
def make_company(db_session, make_user):
    def _make_company(owner: Optional[User] = None, name: str = "Acme Corp") -> Company:
        owner = owner or make_user(Role.EMPLOYER)
        company = Company(owner_id=owner.id, name=name, description="We build things")
        db_session.add(company)
        db_session.commit()
        return company

    return _make_company


@pytest.fixture
def make_job(db_session, make_company):
    """Create a job. Defaults to an OPEN full-time job in a new company."""
    counter = {"n": 0}

    def _make_job(
        company: Optional[Company] = None,
        title: str = "Software Engineer",
        description: str = "Ship features with a small team",
        job_type: JobType = JobType.FULL_TIME,
        work_mode: WorkMode = WorkMode.ONSITE,
        location: str = "Bengaluru",
        salary_min: Optional[int] = None,
        salary_max: Optional[int] = None,
        experience: Optional[int] = None,
        status: JobStatus = JobStatus.OPEN,
        age_minutes: Optional[int] = None,
    ) -> Job:
        counter["n"] += 1
        company = company or make_company()
        created_at = utcnow() - timedelta(minutes=age_minutes if age_minutes is not None else -counter["n"])
        job = Job(
            company_id=company.id,
            title=title,
            description=description,
            job_type=job_type,
            work_mode=work_mode,
            location=location,
            salary_min=salary_min,
            salary_max=salary_max,
            experience=experience,
            status=status,
            created_at=created_at,
            updated_at=created_at,
        )
        db_session.add(job)
        db_session.commit()
        return job

    return _make_job


def identity_of(user: User) -> Identity:
    return Identity(id=user.id, email=user.email, role=user.role)


def login(client: TestClient, user: User, password: str = PASSWORD):
    """Log ``user`` in through the API; the client keeps the cookie."""
    response = client.post("/api/v1/auth/login", json={"email": user.email, "password": password})
    assert response.status_code == 200, response.text
    return response
