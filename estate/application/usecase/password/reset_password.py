"""Reset password use case."""

from pydantic import BaseModel, Field, field_validator

from estate.application.usecase.base import BaseUseCase
from estate.application.usecase.common import MessageResponse, check_new_password
from estate.domain.error import InvalidOrExpiredTokenError
from estate.domain.model.identity import utcnow
from estate.domain.service import IdentityService, PasswordService


class ResetPasswordRequest(BaseModel):
    """Reset token and the new password."""

    token: str
    password: str = Field(min_length=6, max_length=72)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        return check_new_password(v)


class ResetPasswordUseCase(BaseUseCase[ResetPasswordRequest, MessageResponse]):
    """Use case for consuming a reset token to replace the password.

    No session is issued; the user logs in with the new password.
    """

    def __init__(
        self,
        identity_service: IdentityService,
        password_service: PasswordService,
    ) -> None:
        """Initialize reset password use case.

        Args:
            identity_service: Identity domain service
            password_service: Password hashing service
        """
        self.identity_service = identity_service
        self.password_service = password_service

    async def execute(self, request: ResetPasswordRequest) -> MessageResponse:
        """Replace the password if the token matches and has not expired.

        Match, expiry check and clearing happen in one conditional write,
        so an expired or already-used token leaves the password untouched.

        Raises:
            InvalidOrExpiredTokenError: If the token is unknown, used or expired
        """
        if not request.token:
            raise InvalidOrExpiredTokenError("reset")

        password_hash = await self.password_service.hash(request.password)
        identity = await self.identity_service.consume_reset_token(
            request.token, password_hash, utcnow()
        )
        if not identity:
            raise InvalidOrExpiredTokenError("reset")

        await self.identity_service.commit()
        return MessageResponse(message="Password reset successful")
