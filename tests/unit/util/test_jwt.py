"""Unit tests for session token creation and validation."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from estate.config import AuthSettings
from estate.util.jwt import (
    InvalidTokenError,
    TokenExpiredError,
    create_token,
    verify_token,
)

SETTINGS = AuthSettings(jwt_secret="unit-test-secret")


class TestCreateToken:
    """Tests for create_token()."""

    def test_claim_shape(self):
        """Token should carry id, email, isSeller and exp."""
        token = create_token("abc", "a@x.com", True, SETTINGS)

        claims = jwt.decode(token, "unit-test-secret", algorithms=["HS256"])

        assert claims["id"] == "abc"
        assert claims["email"] == "a@x.com"
        assert claims["isSeller"] is True
        assert "exp" in claims

    def test_expires_after_seven_days(self):
        """Expiry should be jwt_expiry_days from now."""
        before = datetime.now(timezone.utc)
        token = create_token("abc", "a@x.com", False, SETTINGS)

        exp = datetime.fromtimestamp(
            jwt.decode(token, "unit-test-secret", algorithms=["HS256"])["exp"],
            tz=timezone.utc,
        )

        assert timedelta(days=7) - timedelta(seconds=5) <= exp - before
        assert exp - before <= timedelta(days=7, seconds=5)


class TestVerifyToken:
    """Tests for verify_token()."""

    def test_valid_token_round_trips_payload(self):
        """A fresh token should verify to its payload."""
        token = create_token("abc", "a@x.com", True, SETTINGS)

        payload = verify_token(token, SETTINGS)

        assert payload.id == "abc"
        assert payload.email == "a@x.com"
        assert payload.is_seller is True

    def test_expired_token_raises_token_expired(self):
        """An expired token should be distinguishable from an invalid one."""
        token = jwt.encode(
            {
                "id": "abc",
                "email": "a@x.com",
                "isSeller": False,
                "exp": datetime.now(timezone.utc) - timedelta(seconds=1),
            },
            "unit-test-secret",
            algorithm="HS256",
        )

        with pytest.raises(TokenExpiredError):
            verify_token(token, SETTINGS)

    def test_wrong_signature_raises_invalid_token(self):
        """A token signed with another secret should be invalid."""
        other = AuthSettings(jwt_secret="someone-else")
        token = create_token("abc", "a@x.com", False, other)

        with pytest.raises(InvalidTokenError):
            verify_token(token, SETTINGS)

    def test_garbage_raises_invalid_token(self):
        """A malformed token should be invalid."""
        with pytest.raises(InvalidTokenError):
            verify_token("not-a-jwt", SETTINGS)

    def test_missing_claims_raise_invalid_token(self):
        """A signed token without the session claims should be invalid."""
        token = jwt.encode(
            {"exp": datetime.now(timezone.utc) + timedelta(hours=1)},
            "unit-test-secret",
            algorithm="HS256",
        )

        with pytest.raises(InvalidTokenError):
            verify_token(token, SETTINGS)

    def test_expired_is_not_reported_as_invalid(self):
        """TokenExpiredError and InvalidTokenError should be separate types."""
        assert not issubclass(TokenExpiredError, InvalidTokenError)
        assert not issubclass(InvalidTokenError, TokenExpiredError)
