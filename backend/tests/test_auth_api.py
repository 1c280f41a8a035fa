"""
Tests for the authentication endpoints and the session cookie.
"""

import pytest
from fastapi.testclient import TestClient

from conftest import PASSWORD, login
from jobboard.models import Company, Profile, Role, User, UserSession
from jobboard.services import auth as auth_service


def signup_payload(**overrides):
    payload = {
        "full_name": "Meera Iyer",
        "email": "Meera@Example.com",
        "password": "supersecret",
        "mobile_number": "9876543210",
    }
    payload.update(overrides)
    return payload


class TestSignup:
    def test_candidate_signup_logs_in(self, client, db_session):
        response = client.post("/api/v1/auth/signup", json=signup_payload())

        assert response.status_code == 201
        body = response.json()
        assert body["user"]["email"] == "meera@example.com"
        assert body["user"]["role"] == "CANDIDATE"
        assert body["user"]["full_name"] == "Meera Iyer"

        cookie = response.headers["set-cookie"].lower()
        assert "session_token=" in cookie
        assert "httponly" in cookie
        assert "samesite=lax" in cookie
        assert "path=/" in cookie
        assert "max-age=604800" in cookie
        assert "secure" not in cookie

        assert client.get("/api/v1/auth/me").json()["email"] == "meera@example.com"

    def test_duplicate_email(self, client):
        client.post("/api/v1/auth/signup", json=signup_payload())
        response = client.post("/api/v1/auth/signup", json=signup_payload(email="meera@example.com"))

        assert response.status_code == 409
        assert response.json()["error"]["message"] == "An account with this email already exists"

    @pytest.mark.parametrize(
        "overrides, message",
        [
            ({"password": "short"}, "password"),
            ({"email": "not-an-email"}, "email"),
            ({"mobile_number": "12345"}, "Mobile number must be exactly 10 digits"),
        ],
    )
    def test_invalid_payload(self, client, overrides, message):
        response = client.post("/api/v1/auth/signup", json=signup_payload(**overrides))

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert message in error["message"]

    def test_employer_signup_creates_company(self, client, db_session):
        response = client.post(
            "/api/v1/auth/employer/signup",
            json=signup_payload(email="hr@example.com", company_name="Globex"),
        )

        assert response.status_code == 201
        user = response.json()["user"]
        assert user["role"] == "EMPLOYER"
        assert user["company_id"] is not None
        company = db_session.get(Company, user["company_id"])
        assert company.name == "Globex"
        assert company.owner_id == user["id"]

    def test_employer_signup_is_all_or_nothing(self, app, db_session, monkeypatch):
        def broken_session(*args, **kwargs):
            raise RuntimeError("session store unavailable")

        monkeypatch.setattr(auth_service, "create_session", broken_session)
        failing_client = TestClient(app, raise_server_exceptions=False)

        response = failing_client.post(
            "/api/v1/auth/employer/signup",
            json=signup_payload(email="hr@example.com", company_name="Globex"),
        )

        assert response.status_code == 500
        assert response.json() == {"error": {"code": "INTERNAL_ERROR", "message": "An internal error occurred"}}
        assert db_session.query(User).count() == 0
        assert db_session.query(Profile).count() == 0
        assert db_session.query(Company).count() == 0


class TestLogin:
    def test_login_sets_cookie(self, client, make_user):
        user = make_user(Role.EMPLOYER)
        response = login(client, user)

        assert response.json()["user"]["id"] == user.id
        assert client.cookies.get("session_token")

    def test_login_is_case_insensitive_on_email(self, client, make_user):
        user = make_user(email="casey@example.com")
        response = client.post("/api/v1/auth/login", json={"email": "CASEY@example.com", "password": PASSWORD})
        assert response.status_code == 200
        assert response.json()["user"]["id"] == user.id

    @pytest.mark.parametrize("email, password", [("nobody@example.com", PASSWORD), (None, "wrong-password")])
    def test_bad_credentials_same_answer(self, client, make_user, email, password):
        user = make_user()
        response = client.post("/api/v1/auth/login", json={"email": email or user.email, "password": password})

        assert response.status_code == 401
        assert response.json() == {"error": {"code": "UNAUTHORIZED", "message": "Invalid email or password"}}

    def test_deactivated_account_refused(self, client, make_user):
        user = make_user(is_active=False)
        response = client.post("/api/v1/auth/login", json={"email": user.email, "password": PASSWORD})

        assert response.status_code == 403
        assert response.json()["error"]["message"] == "Account is deactivated"


class TestSessionLifecycle:
    def test_me_requires_session(self, client):
        response = client.get("/api/v1/auth/me")
        assert response.status_code == 401

    def test_logout_deletes_session(self, client, db_session, make_user):
        user = make_user()
        login(client, user)
        assert db_session.query(UserSession).filter(UserSession.user_id == user.id).count() == 1

        response = client.post("/api/v1/auth/logout")

        assert response.status_code == 200
        assert db_session.query(UserSession).filter(UserSession.user_id == user.id).count() == 0
        assert client.get("/api/v1/auth/me").status_code == 401

    def test_logout_without_session(self, client):
        assert client.post("/api/v1/auth/logout").status_code == 200

    def test_deactivation_locks_out_live_session(self, client, db_session, make_user):
        user = make_user()
        login(client, user)
        assert client.get("/api/v1/auth/me").status_code == 200

        user.is_active = False
        db_session.commit()

        assert client.get("/api/v1/auth/me").status_code == 401

    def test_change_password_revokes_every_session(self, client, app, db_session, make_user):
        user = make_user()
        other_device = TestClient(app)
        login(other_device, user)
        login(client, user)

        response = client.post(
            "/api/v1/auth/change-password",
            json={"current_password": PASSWORD, "new_password": "brand-new-pass"},
        )

        assert response.status_code == 200
        assert db_session.query(UserSession).filter(UserSession.user_id == user.id).count() == 0
        assert other_device.get("/api/v1/auth/me").status_code == 401
        login(client, user, password="brand-new-pass")

    def test_change_password_wrong_current(self, client, make_user):
        login(client, make_user())
        response = client.post(
            "/api/v1/auth/change-password",
            json={"current_password": "not-it", "new_password": "brand-new-pass"},
        )
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Current password is incorrect"
