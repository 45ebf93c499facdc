"""Verify email use case."""

import logfire
from pydantic import BaseModel

from estate.application.usecase.base import BaseUseCase
from estate.application.usecase.common import SessionResponse
from estate.domain.error import InvalidOrExpiredTokenError
from estate.domain.service import IdentityService, JWTService


class VerifyEmailRequest(BaseModel):
    """Token from the emailed verification link."""

    token: str


class VerifyEmailUseCase(BaseUseCase[VerifyEmailRequest, SessionResponse]):
    """Use case for consuming an email verification token."""

    def __init__(
        self,
        identity_service: IdentityService,
        jwt_service: JWTService,
    ) -> None:
        """Initialize verify email use case.

        Args:
            identity_service: Identity domain service
            jwt_service: JWT token domain service
        """
        self.identity_service = identity_service
        self.jwt_service = jwt_service

    async def execute(self, request: VerifyEmailRequest) -> SessionResponse:
        """Mark the email verified and issue a session.

        The token is cleared in the same write that sets the flag, so a
        second presentation fails.

        Raises:
            InvalidOrExpiredTokenError: If no identity holds this token
        """
        identity = None
        if request.token:
            identity = await self.identity_service.consume_email_verification_token(
                request.token
            )
        if not identity:
            raise InvalidOrExpiredTokenError("verification")
        await self.identity_service.commit()

        token = self.jwt_service.create_token(identity)
        logfire.info("Session issued after email verification", identity_id=str(identity.id))

        return SessionResponse.for_identity(
            "Email verified successfully", token, identity
        )
