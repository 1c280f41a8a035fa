"""
Tests for core/rbac.py - role guards.
"""

import dataclasses

import pytest

from jobboard.core.errors import AuthenticationError, AuthorizationError
from jobboard.core.rbac import (
    Identity,
    RoleGuard,
    has_role,
    require_admin,
    require_candidate,
    require_employer,
    require_identity,
    require_role,
    require_user,
    role_guard,
)
from jobboard.models import Role


def identity(role: Role) -> Identity:
    return Identity(id=1, email="someone@example.com", role=role)


class TestRequireIdentity:
    def test_missing_identity_is_unauthenticated(self):
        with pytest.raises(AuthenticationError):
            require_identity(None)

    def test_identity_passes_through(self):
        user = identity(Role.CANDIDATE)
        assert require_identity(user) is user


class TestRoleGateCompleteness:
    """Every guard admits exactly its declared roles, checked for every role."""

    @pytest.mark.parametrize(
        "guard, admitted",
        [
            (require_candidate, {Role.CANDIDATE}),
            (require_employer, {Role.EMPLOYER, Role.ADMIN}),
            (require_admin, {Role.ADMIN}),
            (require_user, {Role.CANDIDATE, Role.EMPLOYER, Role.ADMIN}),
        ],
    )
    def test_guard_admits_exactly(self, guard, admitted):
        assert guard.allowed_roles == admitted
        for role in Role:
            if role in admitted:
                assert guard(identity(role)).role == role
            else:
                with pytest.raises(AuthorizationError):
                    guard(identity(role))

    @pytest.mark.parametrize("guard", [require_candidate, require_employer, require_admin, require_user])
    def test_every_guard_rejects_anonymous(self, guard):
        with pytest.raises(AuthenticationError):
            guard(None)

    def test_allowed_roles_are_fixed_at_definition(self):
        assert isinstance(require_employer, RoleGuard)
        with pytest.raises(dataclasses.FrozenInstanceError):
            require_employer.allowed_roles = frozenset(Role)
        assert role_guard(Role.EMPLOYER, admin_override=True, message="x").allowed_roles == {Role.EMPLOYER, Role.ADMIN}

    def test_admin_cannot_use_candidate_actions(self):
        with pytest.raises(AuthorizationError) as exc_info:
            require_candidate(identity(Role.ADMIN))
        assert "Candidate" in exc_info.value.message


class TestRequireRole:
    def test_custom_message(self):
        with pytest.raises(AuthorizationError) as exc_info:
            require_role(identity(Role.CANDIDATE), [Role.ADMIN], "Nope")
        assert exc_info.value.message == "Nope"
        assert exc_info.value.status_code == 403

    def test_has_role(self):
        assert has_role(identity(Role.ADMIN), Role.ADMIN)
        assert not has_role(identity(Role.EMPLOYER), Role.ADMIN)
        assert not has_role(None, Role.ADMIN)
