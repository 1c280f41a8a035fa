"""
Tests for core/security.py and core/config.py.
"""

import pytest
from pydantic import ValidationError

from jobboard.core.config import Settings
from jobboard.core.security import (
    generate_session_token,
    get_password_hash,
    is_session_token_shaped,
    verify_password,
)


class TestPasswordHashing:
    def test_hash_verifies(self):
        hashed = get_password_hash("correct horse", rounds=4)
        assert hashed != "correct horse"
        assert verify_password("correct horse", hashed)

    def test_wrong_password_rejected(self):
        hashed = get_password_hash("correct horse", rounds=4)
        assert not verify_password("battery staple", hashed)


class TestSessionTokens:
    def test_token_is_64_lowercase_hex(self):
        token = generate_session_token()
        assert len(token) == 64
        assert token == token.lower()
        assert is_session_token_shaped(token)

    def test_tokens_are_unique(self):
        assert len({generate_session_token() for _ in range(50)}) == 50

    @pytest.mark.parametrize(
        "value",
        [None, "", "a" * 63, "a" * 65, "g" * 64, "a" * 63 + "-", " " + "a" * 63],
    )
    def test_malformed_values_rejected(self, value):
        assert not is_session_token_shaped(value)

    def test_uppercase_hex_accepted(self):
        assert is_session_token_shaped("ABCDEF0123456789" * 4)


class TestSettings:
    def test_unknown_environment_fails(self):
        with pytest.raises(ValidationError):
            Settings(APP_ENV="staging")

    def test_production_flag(self):
        assert Settings(APP_ENV="production").is_production
        assert not Settings(APP_ENV="development").is_production

    def test_cors_origins_split(self):
        settings = Settings(BACKEND_CORS_ORIGINS="http://a.example.com, http://b.example.com,")
        assert settings.cors_origins == ["http://a.example.com", "http://b.example.com"]

    def test_settings_are_frozen(self):
        settings = Settings()
        with pytest.raises(ValidationError):
            settings.APP_NAME = "Other"
