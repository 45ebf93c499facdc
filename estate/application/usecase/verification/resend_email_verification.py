"""Resend email verification use case."""

import logfire
from pydantic import BaseModel

from estate.application.usecase.base import BaseUseCase
from estate.application.usecase.common import MessageResponse, parse_email
from estate.domain.service import CodeGenerator, IdentityService, NotificationService

RESEND_EMAIL_MESSAGE = (
    "If your email is registered, a new verification link has been sent"
)


class ResendEmailVerificationRequest(BaseModel):
    """Address to resend the verification link to."""

    email: str


class ResendEmailVerificationUseCase(
    BaseUseCase[ResendEmailVerificationRequest, MessageResponse]
):
    """Use case for issuing a fresh email verification token.

    The new token overwrites the stored one, so any earlier link stops
    working immediately.
    """

    def __init__(
        self,
        identity_service: IdentityService,
        code_generator: CodeGenerator,
        notification_service: NotificationService,
    ) -> None:
        """Initialize resend email verification use case.

        Args:
            identity_service: Identity domain service
            code_generator: Verification artifact generator
            notification_service: Notification domain service
        """
        self.identity_service = identity_service
        self.code_generator = code_generator
        self.notification_service = notification_service

    async def execute(self, request: ResendEmailVerificationRequest) -> MessageResponse:
        """Regenerate and resend the link.

        Answers identically whether or not the email is registered.
        """
        email = parse_email(request.email)
        identity = await self.identity_service.get_by_email(email) if email else None
        if not identity:
            logfire.info("Verification resend for unknown email")
            return MessageResponse(message=RESEND_EMAIL_MESSAGE)

        token = self.code_generator.email_verification_token()
        await self.identity_service.update(
            identity.id, email_verification_token=token
        )
        await self.identity_service.commit()
        # Delivery problems are logged by the notification service
        await self.notification_service.send_email_verification(
            identity.email.root, token
        )

        return MessageResponse(message=RESEND_EMAIL_MESSAGE)
