"""
Role-based access control guards.

Pure assertions over an already-resolved identity; nothing here touches
the database. Call ``jobboard.api.deps.get_current_user`` first, then a
guard, then the ownership guards in ``jobboard.services.ownership``.

ADMIN is an override only where a guard is declared with
``admin_override=True``; the allowed set is computed once, at the guard's
definition, so each guard's effective roles are visible in one place.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from jobboard.core.errors import AuthenticationError, AuthorizationError
from jobboard.models.user import Role


@dataclass(frozen=True)
class Identity:
    """The authenticated caller: projection of a user row."""

    id: int
    email: str
    role: Role


def require_identity(user: Optional[Identity]) -> Identity:
    if user is None:
        raise AuthenticationError("You must be logged in to access this resource")
    return user


def require_role(
    user: Optional[Identity],
    allowed_roles: Iterable[Role],
    message: str = "Insufficient permissions",
) -> Identity:
    """
    Require an authenticated identity whose role is in ``allowed_roles``.

    Raises:
        AuthenticationError: if there is no identity
        AuthorizationError: if the role is not allowed
    """
    identity = require_identity(user)
    if identity.role not in frozenset(allowed_roles):
        raise AuthorizationError(message)
    return identity


@dataclass(frozen=True)
class RoleGuard:
    """A callable guard admitting exactly ``allowed_roles``."""

    allowed_roles: frozenset
    message: str

    def __call__(self, user: Optional[Identity]) -> Identity:
        return require_role(user, self.allowed_roles, self.message)


def role_guard(*roles: Role, admin_override: bool, message: str) -> RoleGuard:
    """Build a guard for ``roles``, plus ADMIN when ``admin_override`` is set."""
    allowed = frozenset(roles) | ({Role.ADMIN} if admin_override else frozenset())
    return RoleGuard(allowed, message)


# Candidate-only actions (applying, saving jobs). No admin override.
require_candidate = role_guard(
    Role.CANDIDATE,
    admin_override=False,
    message="Candidate role required to perform this action",
)

require_employer = role_guard(
    Role.EMPLOYER,
    admin_override=True,
    message="Employer role required to perform this action",
)

require_admin = role_guard(
    Role.ADMIN,
    admin_override=False,
    message="Admin role required to perform this action",
)

require_user = role_guard(
    Role.CANDIDATE,
    Role.EMPLOYER,
    admin_override=True,
    message="User role required",
)


def has_role(user: Optional[Identity], role: Role) -> bool:
    """Exact role check that returns a boolean instead of raising."""
    return user is not None and user.role == role
