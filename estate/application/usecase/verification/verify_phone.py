"""Verify phone use case."""

import logfire
from pydantic import BaseModel

from estate.application.usecase.base import BaseUseCase
from estate.application.usecase.common import SessionResponse, parse_email
from estate.domain.error import InvalidOtpError, NotFoundError
from estate.domain.service import IdentityService, JWTService


class VerifyPhoneRequest(BaseModel):
    """Code the user received on their phone."""

    email: str
    otp: str


class VerifyPhoneUseCase(BaseUseCase[VerifyPhoneRequest, SessionResponse]):
    """Use case for consuming a phone one-time code."""

    def __init__(
        self,
        identity_service: IdentityService,
        jwt_service: JWTService,
    ) -> None:
        """Initialize verify phone use case.

        Args:
            identity_service: Identity domain service
            jwt_service: JWT token domain service
        """
        self.identity_service = identity_service
        self.jwt_service = jwt_service

    async def execute(self, request: VerifyPhoneRequest) -> SessionResponse:
        """Mark the phone verified and issue a session.

        Raises:
            NotFoundError: If no identity has this email
            InvalidOtpError: If the code does not match exactly, or no code
                is outstanding
        """
        email = parse_email(request.email)
        if not email or not await self.identity_service.get_by_email(email):
            raise NotFoundError("Identity", request.email)

        identity = None
        if request.otp:
            identity = await self.identity_service.consume_phone_otp(
                email, request.otp
            )
        if not identity:
            raise InvalidOtpError()
        await self.identity_service.commit()

        token = self.jwt_service.create_token(identity)
        logfire.info("Session issued after phone verification", identity_id=str(identity.id))

        return SessionResponse.for_identity(
            "Phone verified successfully", token, identity
        )
