"""Google Sign-In ID token verification.

The browser obtains a signed ID token from Google and posts it to us. We
check the RS256 signature against Google's published JWKS, the audience
against our OAuth client ID, the issuer and the expiry.
"""

import time

import httpx
import jwt
import logfire

from estate.adapter.error import GoogleAuthError
from estate.domain.error import InvalidAssertionError
from estate.domain.service.federated_auth_service import AssertionVerifier
from estate.domain.value.types import Email, FederatedIdentityInfo, FederatedProvider

GOOGLE_ISSUERS = ("accounts.google.com", "https://accounts.google.com")


class GoogleIdentityVerifier(AssertionVerifier):
    """Base class for Google ID token verifiers.

    Provides type distinction for dependency injection.
    """

    pass


class RealGoogleIdentityVerifier(GoogleIdentityVerifier):
    """Verifies Google ID tokens against Google's signing keys."""

    def __init__(
        self,
        client_id: str,
        certs_url: str,
        cache_seconds: int = 3600,
        min_refresh_seconds: float = 60.0,
    ) -> None:
        """Initialize verifier.

        Args:
            client_id: Google OAuth client ID; tokens must be issued for it
            certs_url: Google JWKS endpoint
            cache_seconds: How long fetched keys are reused
            min_refresh_seconds: Minimum gap between fetches triggered by an
                unknown key id
        """
        self.client_id = client_id
        self.certs_url = certs_url
        self.cache_seconds = cache_seconds
        self.min_refresh_seconds = min_refresh_seconds

        self._jwks: jwt.PyJWKSet | None = None
        self._jwks_fetched_at = 0.0

    async def verify(self, credential: str) -> FederatedIdentityInfo:
        """Verify a Google ID token.

        Args:
            credential: Raw ID token

        Returns:
            Identity facts from the token

        Raises:
            InvalidAssertionError: If the token is malformed, forged, expired
                or issued for another client
            GoogleAuthError: If Google's keys cannot be fetched
        """
        try:
            header = jwt.get_unverified_header(credential)
        except jwt.PyJWTError as e:
            raise InvalidAssertionError(f"Malformed ID token: {e}") from e

        key_id = header.get("kid")
        signing_key = await self._get_signing_key(key_id)

        try:
            claims = jwt.decode(
                credential,
                signing_key.key,
                algorithms=["RS256"],
                audience=self.client_id,
                options={"require": ["exp", "iss", "sub", "aud"]},
            )
        except jwt.ExpiredSignatureError as e:
            logfire.warn("Google ID token expired")
            raise InvalidAssertionError("ID token expired") from e
        except jwt.PyJWTError as e:
            logfire.warn("Google ID token rejected", error=str(e))
            raise InvalidAssertionError(f"Invalid ID token: {e}") from e

        if claims.get("iss") not in GOOGLE_ISSUERS:
            logfire.warn("Google ID token issuer mismatch", iss=claims.get("iss"))
            raise InvalidAssertionError("ID token issuer is not Google")

        return self._to_identity_info(claims)

    @staticmethod
    def _to_identity_info(claims: dict) -> FederatedIdentityInfo:
        email = claims.get("email")
        if not email:
            raise InvalidAssertionError("ID token carries no email")

        # Google sends email_verified as a bool, older tokens as a string
        email_verified = claims.get("email_verified", False)
        if isinstance(email_verified, str):
            email_verified = email_verified.lower() == "true"

        try:
            normalized = Email(email)
        except ValueError as e:
            raise InvalidAssertionError(f"ID token email is malformed: {e}") from e

        return FederatedIdentityInfo(
            provider=FederatedProvider.GOOGLE,
            subject=str(claims["sub"]),
            email=normalized,
            email_verified=bool(email_verified),
            name=claims.get("name"),
            picture=claims.get("picture"),
        )

    async def _get_signing_key(self, key_id: str | None) -> jwt.PyJWK:
        jwks = await self._load_jwks(force=False)
        key = self._find_key(jwks, key_id)
        if key is None and self._may_refresh():
            # Google rotates keys; refetch before giving up
            jwks = await self._load_jwks(force=True)
            key = self._find_key(jwks, key_id)
        if key is None:
            raise InvalidAssertionError(f"Unknown signing key: {key_id}")
        return key

    def _may_refresh(self) -> bool:
        """Unknown key ids refetch at most once per ``min_refresh_seconds``."""
        return time.monotonic() - self._jwks_fetched_at >= self.min_refresh_seconds

    @staticmethod
    def _find_key(jwks: jwt.PyJWKSet, key_id: str | None) -> jwt.PyJWK | None:
        for key in jwks.keys:
            if key.key_id == key_id:
                return key
        return None

    async def _load_jwks(self, force: bool) -> jwt.PyJWKSet:
        fresh = time.monotonic() - self._jwks_fetched_at < self.cache_seconds
        if self._jwks is not None and fresh and not force:
            return self._jwks

        try:
            async with httpx.AsyncClient(timeout=10.0) as client:
                response = await client.get(self.certs_url)
                if response.status_code != 200:
                    logfire.error(
                        "Google certs request failed",
                        status_code=response.status_code,
                        error=response.text,
                    )
                    raise GoogleAuthError(
                        f"Certs request failed: {response.status_code}"
                    )
                data = response.json()
        except httpx.HTTPError as e:
            logfire.error("Google certs HTTP error", error=str(e))
            raise GoogleAuthError(f"HTTP error fetching Google certs: {e}") from e

        try:
            self._jwks = jwt.PyJWKSet.from_dict(data)
        except jwt.PyJWTError as e:
            raise GoogleAuthError(f"Unusable Google certs: {e}") from e
        self._jwks_fetched_at = time.monotonic()
        logfire.info("Google certs loaded", key_count=len(self._jwks.keys))
        return self._jwks


class MockGoogleIdentityVerifier(GoogleIdentityVerifier):
    """Mock Google verifier for testing.

    Credentials of the form ``valid:<email>[:<subject>]`` verify; anything
    else is rejected. ``valid-unverified:<email>`` yields an assertion
    whose email is not verified by Google.
    """

    def __init__(self):
        """Initialize mock verifier without real configuration."""
        pass

    async def verify(self, credential: str) -> FederatedIdentityInfo:
        """Return identity facts encoded in the mock credential.

        Raises:
            InvalidAssertionError: If the credential is not a mock credential
        """
        kind, _, rest = credential.partition(":")
        if kind not in ("valid", "valid-unverified") or not rest:
            raise InvalidAssertionError("Invalid mock credential")

        email, _, subject = rest.partition(":")
        return FederatedIdentityInfo(
            provider=FederatedProvider.GOOGLE,
            subject=subject or f"google-{email}",
            email=Email(email),
            email_verified=kind == "valid",
            name="Mock Google User",
            picture="https://example.com/avatar.jpg",
        )
