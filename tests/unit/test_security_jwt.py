"""
Unit tests for JWT token utilities.
"""

import re
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pytest
from jose import jwt

from notefeed.config import Settings
from notefeed.security.jwt import (
    create_access_token,
    decode_access_token,
    generate_refresh_token,
    get_user_id_from_token,
)


class TestJWTUtils:
    """Test JWT token creation and validation."""

    @pytest.fixture
    def mock_settings(self):
        """Mock settings for testing."""
        return Settings(
            _env_file=None,
            secret_key="test-secret-key",
            algorithm="HS256",
            access_token_expire_minutes=30,
        )

    @pytest.fixture(autouse=True)
    def patched_settings(self, mock_settings):
        with patch("notefeed.security.jwt.get_settings", return_value=mock_settings):
            yield

    def test_create_access_token(self, mock_settings):
        token = create_access_token({"sub": "42"})

        decoded = jwt.decode(token, mock_settings.secret_key, algorithms=[mock_settings.algorithm])

        assert decoded["sub"] == "42"
        assert decoded["type"] == "access"
        assert "exp" in decoded
        assert decoded["jti"]

    def test_default_expiry_comes_from_settings(self, mock_settings):
        token = create_access_token({"sub": "42"})
        decoded = jwt.decode(token, mock_settings.secret_key, algorithms=[mock_settings.algorithm])

        exp_time = datetime.fromtimestamp(decoded["exp"], tz=timezone.utc)
        expected = datetime.now(timezone.utc) + timedelta(minutes=30)
        # Allow 5 seconds difference for test execution time
        assert abs((exp_time - expected).total_seconds()) < 5

    def test_tokens_for_same_user_differ(self):
        assert create_access_token({"sub": "1"}) != create_access_token({"sub": "1"})

    def test_additional_claims_are_kept(self, mock_settings):
        token = create_access_token({"sub": "7", "username": "alice", "roles": ["user"]})
        decoded = jwt.decode(token, mock_settings.secret_key, algorithms=[mock_settings.algorithm])

        assert decoded["username"] == "alice"
        assert decoded["roles"] == ["user"]

    def test_generate_refresh_token(self):
        token1 = generate_refresh_token()
        token2 = generate_refresh_token()

        assert re.fullmatch(r"[0-9a-f]{64}", token1)
        assert token1 != token2

    def test_decode_access_token_invalid(self):
        assert decode_access_token("invalid.token.here") is None
        assert decode_access_token("") is None

    def test_decode_access_token_wrong_type(self, mock_settings):
        token = jwt.encode(
            {"sub": "1", "type": "refresh"}, mock_settings.secret_key, algorithm=mock_settings.algorithm
        )
        assert decode_access_token(token) is None

    def test_decode_access_token_expired(self):
        token = create_access_token({"sub": "1"}, expires_delta=timedelta(seconds=-1))
        assert decode_access_token(token) is None

    def test_decode_access_token_wrong_secret(self, mock_settings):
        token = jwt.encode(
            {"sub": "1", "type": "access"}, "wrong-secret-key", algorithm=mock_settings.algorithm
        )
        assert decode_access_token(token) is None

    def test_get_user_id_from_token(self):
        assert get_user_id_from_token(create_access_token({"sub": "42"})) == 42

    def test_get_user_id_from_token_invalid(self):
        assert get_user_id_from_token("invalid.token") is None
        assert get_user_id_from_token(create_access_token({"username": "alice"})) is None
        assert get_user_id_from_token(create_access_token({"sub": "not-a-number"})) is None
