"""
Tests for bearer token helpers and actor resolution.
"""

from datetime import UTC, datetime, timedelta

from jose import jwt

from bookreview.config import get_settings
from bookreview.dependencies import get_actor_id
from bookreview.models import User
from bookreview.services.security import (
    ALGORITHM,
    create_access_token,
    decode_token,
    get_token_user_id,
)


def encode(payload: dict, key: str | None = None) -> str:
    return jwt.encode(payload, key or get_settings().secret_key, algorithm=ALGORITHM)


class TestTokens:
    """Tests for create_access_token / get_token_user_id."""

    def test_round_trip_user_id(self):
        """Test a token carries the user id it was issued for."""
        token = create_access_token(7)

        assert get_token_user_id(token) == 7

    def test_payload_layout(self):
        """Test the access token claims."""
        payload = decode_token(create_access_token(3))

        assert payload["sub"] == "3"
        assert payload["type"] == "access"
        assert "exp" in payload

    def test_expired_token(self):
        """Test an expired token is rejected."""
        token = create_access_token(7, expires_delta=timedelta(seconds=-1))

        assert decode_token(token) is None
        assert get_token_user_id(token) is None

    def test_wrong_signature(self):
        """Test a token signed with another key is rejected."""
        token = encode(
            {"sub": "7", "type": "access"},
            key="another-secret-key-that-is-also-long-enough",
        )

        assert get_token_user_id(token) is None

    def test_garbage_token(self):
        """Test a malformed token is rejected."""
        assert get_token_user_id("not-a-jwt") is None

    def test_refresh_token_rejected(self):
        """Test a refresh token cannot be used as an access token."""
        exp = datetime.now(UTC) + timedelta(minutes=5)
        token = encode({"sub": "7", "type": "refresh", "exp": exp})

        assert get_token_user_id(token) is None

    def test_non_numeric_subject_rejected(self):
        """Test a non-numeric subject is rejected."""
        exp = datetime.now(UTC) + timedelta(minutes=5)
        token = encode({"sub": "alice", "type": "access", "exp": exp})

        assert get_token_user_id(token) is None

    def test_non_positive_subject_rejected(self):
        """Test a zero subject is rejected."""
        exp = datetime.now(UTC) + timedelta(minutes=5)
        token = encode({"sub": "0", "type": "access", "exp": exp})

        assert get_token_user_id(token) is None


class TestGetActorId:
    """Tests for the get_actor_id dependency."""

    def test_no_token(self, db_session):
        """Test no token means an anonymous actor."""
        assert get_actor_id(db_session, None) is None

    def test_valid_token(self, db_session, sample_user: User):
        """Test a valid token resolves to its user."""
        token = create_access_token(sample_user.id)

        assert get_actor_id(db_session, token) == sample_user.id

    def test_unknown_user(self, db_session):
        """Test a token for a deleted user is anonymous."""
        token = create_access_token(424242)

        assert get_actor_id(db_session, token) is None

    def test_invalid_token(self, db_session, sample_user: User):
        """Test an invalid token is anonymous."""
        assert get_actor_id(db_session, "broken") is None
