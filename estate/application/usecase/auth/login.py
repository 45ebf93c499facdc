"""Login use case."""

import logfire
from pydantic import BaseModel

from estate.application.usecase.base import BaseUseCase
from estate.application.usecase.common import SessionResponse, parse_email
from estate.domain.error import InvalidCredentialsError
from estate.domain.service import IdentityService, JWTService, PasswordService


class LoginRequest(BaseModel):
    """Email and password login."""

    email: str
    password: str


class LoginUseCase(BaseUseCase[LoginRequest, SessionResponse]):
    """Use case for password login.

    Verification status never blocks login; it is reported alongside the
    token so the client can prompt for the missing channel.
    """

    def __init__(
        self,
        identity_service: IdentityService,
        password_service: PasswordService,
        jwt_service: JWTService,
    ) -> None:
        """Initialize login use case.

        Args:
            identity_service: Identity domain service
            password_service: Password hashing service
            jwt_service: JWT token domain service
        """
        self.identity_service = identity_service
        self.password_service = password_service
        self.jwt_service = jwt_service

    async def execute(self, request: LoginRequest) -> SessionResponse:
        """Execute login.

        Raises:
            InvalidCredentialsError: Unknown email, wrong password, or an
                identity with no password. The three are indistinguishable.
        """
        email = parse_email(request.email)

        with logfire.span("login_identity"):
            identity = (
                await self.identity_service.get_by_email(email) if email else None
            )
            if not identity:
                logfire.warn("Login failed")
                raise InvalidCredentialsError()

            if not await self.password_service.verify(
                request.password, identity.password_hash
            ):
                logfire.warn("Login failed", identity_id=str(identity.id))
                raise InvalidCredentialsError()

            identity = await self.identity_service.record_login(identity.id)
            await self.identity_service.commit()
            token = self.jwt_service.create_token(identity)

            logfire.info(
                "Identity logged in",
                identity_id=str(identity.id),
                email_verified=identity.email_verified,
                phone_verified=identity.phone_verified,
            )

            return SessionResponse.for_identity("Login successful", token, identity)
