"""End-to-end tests for sessions, federated sign-in, password reset and profile."""

import re
from datetime import datetime, timedelta, timezone

import jwt
import pytest
from fastapi.testclient import TestClient

from estate.adapter.smtp import MockEmailGateway
from estate.config import AuthSettings
from estate.domain.service import EmailGateway
from estate.interface.api.app import create_app
from tests.di import build_test_container

REGISTRATION = {
    "name": "Asha",
    "email": "a@x.com",
    "password": "Secret123",
    "phone": "+919810012345",
}


@pytest.fixture
def container():
    """Fresh all-mock container per test."""
    return build_test_container()


@pytest.fixture
def client(container):
    """Create test client backed by the mock container."""
    with TestClient(create_app(container)) as test_client:
        yield test_client
        test_client.portal.call(container.close)


@pytest.fixture
def email_gateway(client, container) -> MockEmailGateway:
    return client.portal.call(container.get, EmailGateway)


@pytest.fixture
def auth_settings(client, container) -> AuthSettings:
    return client.portal.call(container.get, AuthSettings)


def login(client, email="a@x.com", password="Secret123") -> str:
    response = client.post("/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200
    return response.json()["token"]


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


class TestSession:
    """Bearer session validation."""

    def test_verify_returns_profile(self, client):
        """A valid token should resolve to the caller's profile."""
        client.post("/auth/register", json=REGISTRATION)
        token = login(client)

        response = client.get("/auth/verify", headers=bearer(token))

        assert response.status_code == 200
        data = response.json()
        assert data["email"] == "a@x.com"
        assert data["is_seller"] is False
        assert "password_hash" not in data

    def test_missing_token(self, client):
        """No Authorization header should be a 401."""
        response = client.get("/auth/verify")

        assert response.status_code == 401
        assert response.json()["detail"] == "No authentication token provided"
        assert response.headers["www-authenticate"] == "Bearer"

    def test_invalid_token(self, client):
        """A garbage token should be a 401 Invalid token."""
        response = client.get("/auth/verify", headers=bearer("garbage"))

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid token"

    def test_expired_token(self, client, auth_settings):
        """An expired token should be a 401 Token expired."""
        client.post("/auth/register", json=REGISTRATION)
        claims = jwt.decode(
            login(client),
            auth_settings.jwt_secret,
            algorithms=[auth_settings.jwt_algorithm],
        )
        claims["exp"] = datetime.now(timezone.utc) - timedelta(minutes=1)
        expired = jwt.encode(
            claims, auth_settings.jwt_secret, algorithm=auth_settings.jwt_algorithm
        )

        response = client.get("/auth/verify", headers=bearer(expired))

        assert response.status_code == 401
        assert response.json()["detail"] == "Token expired"

    def test_claim_shape(self, client, auth_settings):
        """The token should carry id, email, isSeller and a seven day exp."""
        client.post("/auth/register", json={**REGISTRATION, "is_seller": True})

        claims = jwt.decode(
            login(client),
            auth_settings.jwt_secret,
            algorithms=[auth_settings.jwt_algorithm],
        )

        assert set(claims) == {"id", "email", "isSeller", "exp"}
        assert claims["isSeller"] is True
        lifetime = claims["exp"] - datetime.now(timezone.utc).timestamp()
        assert timedelta(days=6, hours=23).total_seconds() < lifetime
        assert lifetime <= timedelta(days=7).total_seconds()


class TestGoogleSignIn:
    """Federated sign-in through the mock Google verifier."""

    def test_new_user_then_returning_user(self, client):
        """First sign-in creates, second reuses the same identity."""
        first = client.post("/auth/google", json={"credential": "valid:g@x.com:sub-1"})
        second = client.post("/auth/google", json={"credential": "valid:g@x.com:sub-1"})

        assert first.status_code == second.status_code == 200
        assert first.json()["is_new_identity"] is True
        assert first.json()["email_verified"] is True
        assert second.json()["is_new_identity"] is False
        assert first.json()["user"]["id"] == second.json()["user"]["id"]

    def test_google_identity_cannot_password_login(self, client):
        """A federated-only identity has no password to log in with."""
        client.post("/auth/google", json={"credential": "valid:g@x.com"})

        response = client.post(
            "/auth/login", json={"email": "g@x.com", "password": "anything"}
        )

        assert response.status_code == 401

    def test_links_password_account(self, client):
        """A verified Google email should link to the password account."""
        registered = client.post("/auth/register", json=REGISTRATION).json()

        response = client.post("/auth/google", json={"credential": "valid:a@x.com"})

        assert response.status_code == 200
        assert response.json()["user"]["id"] == registered["identity_id"]
        assert response.json()["email_verified"] is True
        assert login(client)

    def test_unverified_google_email_conflicts(self, client):
        """An unverified Google email should not link to an existing account."""
        client.post("/auth/register", json=REGISTRATION)

        response = client.post(
            "/auth/google", json={"credential": "valid-unverified:a@x.com"}
        )

        assert response.status_code == 409

    def test_forged_credential(self, client):
        """A rejected assertion should be a 401."""
        response = client.post("/auth/google", json={"credential": "forged"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid federated credential"


class TestPasswordReset:
    """Forgot-password and reset-password."""

    def reset_token(self, email_gateway: MockEmailGateway) -> str:
        match = re.search(
            r"/reset-password\?token=([0-9a-f]{64})",
            email_gateway.last_to("a@x.com").body,
        )
        assert match
        return match.group(1)

    def test_reset_flow(self, client, email_gateway):
        """The emailed token should replace the password once."""
        client.post("/auth/register", json=REGISTRATION)

        response = client.post("/auth/forgot-password", json={"email": "a@x.com"})
        assert response.status_code == 200
        token = self.reset_token(email_gateway)

        response = client.post(
            "/auth/reset-password", json={"token": token, "password": "NewPass1"}
        )
        assert response.status_code == 200
        assert response.json() == {"message": "Password reset successful"}

        old = client.post(
            "/auth/login", json={"email": "a@x.com", "password": "Secret123"}
        )
        assert old.status_code == 401
        assert login(client, password="NewPass1")

        reused = client.post(
            "/auth/reset-password", json={"token": token, "password": "Other123"}
        )
        assert reused.status_code == 400
        assert reused.json()["detail"] == "Invalid or expired reset token"

    def test_forgot_does_not_reveal_registration(self, client):
        """Known and unknown emails should get the same answer."""
        client.post("/auth/register", json=REGISTRATION)

        known = client.post("/auth/forgot-password", json={"email": "a@x.com"})
        unknown = client.post("/auth/forgot-password", json={"email": "nobody@x.com"})

        assert known.status_code == unknown.status_code == 200
        assert known.json() == unknown.json()

    def test_short_new_password(self, client, email_gateway):
        """The new password should obey the registration length rule."""
        client.post("/auth/register", json=REGISTRATION)
        client.post("/auth/forgot-password", json={"email": "a@x.com"})

        response = client.post(
            "/auth/reset-password",
            json={"token": self.reset_token(email_gateway), "password": "123"},
        )

        assert response.status_code == 422


class TestProfile:
    """Profile endpoints."""

    def test_get_requires_auth(self, client):
        """The profile should not be readable without a session."""
        assert client.get("/users/profile").status_code == 401

    def test_update_profile(self, client):
        """Updating the phone should unverify it."""
        client.post("/auth/register", json=REGISTRATION)
        token = login(client)

        response = client.put(
            "/users/profile",
            headers=bearer(token),
            json={"name": "Asha K", "phone": "+919870011111"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Asha K"
        assert data["phone"] == "+919870011111"
        assert data["phone_verified"] is False

        profile = client.get("/users/profile", headers=bearer(token)).json()
        assert profile["name"] == "Asha K"


class TestHealth:
    """Health endpoint."""

    def test_health(self, client):
        """The health check should report the service as up."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        assert response.json()["service"] == "EstateHub India"
