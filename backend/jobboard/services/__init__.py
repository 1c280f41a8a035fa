from jobboard.services.sessions import (
    create_session,
    validate_session,
    delete_session,
    delete_all_sessions_for_user,
)
from jobboard.services.ownership import (
    require_job_ownership,
    require_company_ownership,
    require_application_access,
    get_company_for_user,
)
from jobboard.services.job_search import search_jobs
from jobboard.services.dashboard import (
    get_employer_overview,
    get_employer_jobs,
    get_job_stats,
    get_admin_overview,
)

__all__ = [
    "create_session",
    "validate_session",
    "delete_session",
    "delete_all_sessions_for_user",
    "require_job_ownership",
    "require_company_ownership",
    "require_application_access",
    "get_company_for_user",
    "search_jobs",
    "get_employer_overview",
    "get_employer_jobs",
    "get_job_stats",
    "get_admin_overview",
]
