"""Forgot password use case."""

from datetime import timedelta

import logfire
from pydantic import BaseModel

from estate.application.usecase.base import BaseUseCase
from estate.application.usecase.common import MessageResponse, parse_email
from estate.config import AuthSettings
from estate.domain.model.identity import utcnow
from estate.domain.service import CodeGenerator, IdentityService, NotificationService

FORGOT_PASSWORD_MESSAGE = (
    "If your email is registered, you will receive a password reset link"
)


class ForgotPasswordRequest(BaseModel):
    """Address to send a reset link to."""

    email: str


class ForgotPasswordUseCase(BaseUseCase[ForgotPasswordRequest, MessageResponse]):
    """Use case for issuing a time-boxed password reset token."""

    def __init__(
        self,
        identity_service: IdentityService,
        code_generator: CodeGenerator,
        notification_service: NotificationService,
        auth_settings: AuthSettings,
    ) -> None:
        """Initialize forgot password use case.

        Args:
            identity_service: Identity domain service
            code_generator: Token generator
            notification_service: Notification domain service
            auth_settings: Authentication settings (reset token lifetime)
        """
        self.identity_service = identity_service
        self.code_generator = code_generator
        self.notification_service = notification_service
        self.auth_settings = auth_settings

    async def execute(self, request: ForgotPasswordRequest) -> MessageResponse:
        """Issue a reset token and email the link.

        A newer request supersedes any outstanding token. The response is
        the same whether or not the email is registered.
        """
        email = parse_email(request.email)

        with logfire.span("forgot_password"):
            identity = (
                await self.identity_service.get_by_email(email) if email else None
            )
            if not identity:
                logfire.info("Password reset requested for unknown email")
                return MessageResponse(message=FORGOT_PASSWORD_MESSAGE)

            token = self.code_generator.reset_token()
            expiry = utcnow() + timedelta(
                minutes=self.auth_settings.reset_token_expiry_minutes
            )
            await self.identity_service.update(
                identity.id, reset_token=token, reset_token_expiry=expiry
            )
            await self.identity_service.commit()
            logfire.info(
                "Password reset token issued",
                identity_id=str(identity.id),
                expires_at=expiry.isoformat(),
            )

            await self.notification_service.send_password_reset(
                identity.email.root, token
            )

            return MessageResponse(message=FORGOT_PASSWORD_MESSAGE)
