from jobboard.models.user import User, Profile, Role
from jobboard.models.auth_session import UserSession
from jobboard.models.company import Company, CompanyType
from jobboard.models.job import Job, JobType, JobStatus, WorkMode
from jobboard.models.application import Application, ApplicationStatus
from jobboard.models.saved_job import SavedJob

__all__ = [
    "User",
    "Profile",
    "Role",
    "UserSession",
    "Company",
    "CompanyType",
    "Job",
    "JobType",
    "JobStatus",
    "WorkMode",
    "Application",
    "ApplicationStatus",
    "SavedJob",
]
