"""
JobBoard Database Seeder

Creates demo accounts and postings:
- An admin
- An employer (Priya Sharma) with a company and four jobs in every status
- A candidate (Arjun Mehta) with one application and one saved job

Run from the backend directory: ``python seed_db.py``
"""

from sqlalchemy.orm import Session

from jobboard.core.config import Settings, settings
from jobboard.core.security import get_password_hash
from jobboard.db.base import Base
from jobboard.db.session import build_engine, build_session_factory
from jobboard.models import (
    Application,
    ApplicationStatus,
    Company,
    CompanyType,
    Job,
    JobStatus,
    JobType,
    Profile,
    Role,
    SavedJob,
    User,
    WorkMode,
)

ADMIN_EMAIL = "admin@jobboard.example.com"
EMPLOYER_EMAIL = "priya.sharma@example.com"
CANDIDATE_EMAIL = "arjun.mehta@example.com"


def _add_user(db: Session, email: str, password: str, role: Role, full_name: str, rounds: int) -> User:
    user = User(email=email, hashed_password=get_password_hash(password, rounds=rounds), role=role)
    db.add(user)
    db.flush()  # Get IDs
    db.add(Profile(user_id=user.id, full_name=full_name, experience=2 if role == Role.CANDIDATE else 0))
    return user


def seed_database(db: Session, settings: Settings) -> bool:
    """
    Seed the database with demo data.

    Returns:
        False if the data was already there, True if it was created
    """
    if db.query(User).filter(User.email == EMPLOYER_EMAIL).first():
        print("Database already seeded. Skipping...")
        return False

    print("Seeding database...")
    rounds = settings.BCRYPT_ROUNDS

    try:
        # 1. Accounts
        _add_user(db, ADMIN_EMAIL, "admin12345", Role.ADMIN, "Platform Admin", rounds)
        employer = _add_user(db, EMPLOYER_EMAIL, "employer123", Role.EMPLOYER, "Priya Sharma", rounds)
        candidate = _add_user(db, CANDIDATE_EMAIL, "candidate123", Role.CANDIDATE, "Arjun Mehta", rounds)

        # 2. Company
        company = Company(
            owner_id=employer.id,
            name="Nimbus Analytics",
            description="Cloud cost analytics for growing teams.",
            website="https://nimbus.example.com",
            location="Bengaluru",
            company_type=CompanyType.STARTUP,
            size="51-200",
            is_verified=True,
        )
        db.add(company)
        db.flush()

        # 3. Jobs
        jobs = [
            Job(
                company_id=company.id,
                title="Senior Backend Engineer",
                description="Design APIs and data pipelines in Python.",
                job_type=JobType.FULL_TIME,
                work_mode=WorkMode.HYBRID,
                location="Bengaluru",
                salary_min=2500000,
                salary_max=4000000,
                experience=5,
                status=JobStatus.OPEN,
            ),
            Job(
                company_id=company.id,
                title="Frontend Developer",
                description="Build dashboards with React and TypeScript.",
                job_type=JobType.FULL_TIME,
                work_mode=WorkMode.REMOTE,
                location="Remote",
                salary_min=1200000,
                salary_max=2000000,
                experience=2,
                status=JobStatus.OPEN,
            ),
            Job(
                company_id=company.id,
                title="Data Analyst Intern",
                description="Six month internship with the insights team.",
                job_type=JobType.INTERN,
                location="Pune",
                status=JobStatus.DRAFT,
            ),
            Job(
                company_id=company.id,
                title="DevOps Contractor",
                description="Kubernetes migration, three month contract.",
                job_type=JobType.CONTRACT,
                location="Hyderabad",
                salary_min=150000,
                status=JobStatus.CLOSED,
            ),
        ]
        db.add_all(jobs)
        db.flush()

        # 4. Candidate activity
        db.add(
            Application(
                job_id=jobs[0].id,
                user_id=candidate.id,
                status=ApplicationStatus.REVIEWING,
                cover_note="Five years building Python services at scale.",
            )
        )
        db.add(SavedJob(user_id=candidate.id, job_id=jobs[1].id))

        db.commit()
    except Exception:
        db.rollback()
        raise

    print("Database seeded successfully!")
    print(f"  Admin:     {ADMIN_EMAIL} / admin12345")
    print(f"  Employer:  {EMPLOYER_EMAIL} / employer123")
    print(f"  Candidate: {CANDIDATE_EMAIL} / candidate123")
    return True


def main() -> None:
    engine = build_engine(settings.DATABASE_URL)
    Base.metadata.create_all(bind=engine)
    db = build_session_factory(engine)()
    try:
        seed_database(db, settings)
    finally:
        db.close()


if __name__ == "__main__":
    main()
