"""JWT session token domain service."""

import logfire

from estate.config import AuthSettings
from estate.domain.model import Identity
from estate.util.jwt import TokenPayload, create_token, verify_token


class JWTService:
    """Mints and validates signed session claims."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(self, identity: Identity) -> str:
        """Create a session token for an identity.

        The claim carries ``id``, ``email`` and ``isSeller`` and expires
        after ``jwt_expiry_days``.

        Args:
            identity: Authenticated identity

        Returns:
            JWT token string
        """
        with logfire.span("jwt_service.create_token", identity_id=str(identity.id)):
            token = create_token(
                str(identity.id),
                identity.email.root,
                identity.is_seller,
                self.auth_settings,
            )
            logfire.info("JWT token created", identity_id=str(identity.id))
            return token

    def verify_token(self, token: str) -> TokenPayload:
        """Verify a session token and extract its payload.

        Args:
            token: JWT token string

        Returns:
            Token payload

        Raises:
            TokenExpiredError: If the token has expired
            InvalidTokenError: If the token is invalid
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                payload = verify_token(token, self.auth_settings)
                logfire.info("JWT token verified", identity_id=payload.id)
                return payload
            except Exception as e:
                logfire.warn("JWT token verification failed", error=str(e))
                raise
