"""
Tests for services/sessions.py - server-side session lifecycle.
"""

from datetime import timedelta

import pytest
from sqlalchemy.exc import OperationalError

from jobboard.db.base import utcnow
from jobboard.models import Role, UserSession
from jobboard.services.sessions import (
    create_session,
    delete_all_sessions_for_user,
    delete_session,
    validate_session,
)


def _expire(db_session, token):
    session = db_session.query(UserSession).filter(UserSession.session_token == token).one()
    session.expires_at = utcnow() - timedelta(seconds=1)
    db_session.commit()


class TestCreateSession:
    def test_creates_row_with_seven_day_expiry(self, db_session, make_user):
        user = make_user()
        before = utcnow()

        token = create_session(db_session, user.id)

        row = db_session.query(UserSession).filter(UserSession.session_token == token).one()
        assert row.user_id == user.id
        lifetime = row.expires_at - before
        assert timedelta(days=7) - timedelta(seconds=5) < lifetime <= timedelta(days=7, seconds=5)

    def test_each_login_gets_its_own_session(self, db_session, make_user):
        user = make_user()
        first = create_session(db_session, user.id)
        second = create_session(db_session, user.id)

        assert first != second
        assert db_session.query(UserSession).filter(UserSession.user_id == user.id).count() == 2


class TestValidateSession:
    def test_valid_session_resolves_identity(self, db_session, make_user):
        user = make_user(Role.EMPLOYER)
        token = create_session(db_session, user.id)

        identity = validate_session(db_session, token)

        assert identity is not None
        assert identity.id == user.id
        assert identity.email == user.email
        assert identity.role == Role.EMPLOYER

    @pytest.mark.parametrize("token", [None, "", "f" * 64])
    def test_missing_or_unknown_token(self, db_session, token):
        assert validate_session(db_session, token) is None

    def test_expired_session_is_deleted(self, db_session, make_user):
        user = make_user()
        token = create_session(db_session, user.id)
        _expire(db_session, token)

        assert validate_session(db_session, token) is None
        assert db_session.query(UserSession).filter(UserSession.session_token == token).count() == 0

        # Second call finds nothing and does not raise
        assert validate_session(db_session, token) is None

    def test_failed_cleanup_is_swallowed(self, db_session, make_user, monkeypatch):
        user = make_user()
        token = create_session(db_session, user.id)
        _expire(db_session, token)

        def failing_commit():
            raise OperationalError("DELETE FROM sessions", {}, Exception("database is locked"))

        monkeypatch.setattr(db_session, "commit", failing_commit)

        assert validate_session(db_session, token) is None

    def test_inactive_user_is_locked_out(self, db_session, make_user):
        user = make_user()
        token = create_session(db_session, user.id)
        user.is_active = False
        db_session.commit()

        assert validate_session(db_session, token) is None
        # The row stays; reactivation makes it usable again
        assert db_session.query(UserSession).filter(UserSession.session_token == token).count() == 1

        user.is_active = True
        db_session.commit()
        assert validate_session(db_session, token) is not None


class TestDeleteSessions:
    def test_delete_session(self, db_session, make_user):
        user = make_user()
        token = create_session(db_session, user.id)

        delete_session(db_session, token)

        assert validate_session(db_session, token) is None

    def test_delete_all_sessions_for_user(self, db_session, make_user):
        user = make_user()
        other = make_user()
        tokens = [create_session(db_session, user.id) for _ in range(3)]
        other_token = create_session(db_session, other.id)

        assert delete_all_sessions_for_user(db_session, user.id) == 3

        assert all(validate_session(db_session, token) is None for token in tokens)
        assert validate_session(db_session, other_token) is not None
