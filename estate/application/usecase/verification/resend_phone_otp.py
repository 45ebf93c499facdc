"""Resend phone OTP use case."""

import logfire
from pydantic import BaseModel

from estate.application.usecase.base import BaseUseCase
from estate.application.usecase.common import MessageResponse, parse_email
from estate.domain.service import CodeGenerator, IdentityService, NotificationService

RESEND_OTP_MESSAGE = "If your email is registered, a new code has been sent"


class ResendPhoneOtpRequest(BaseModel):
    """Email of the identity whose phone should get a new code."""

    email: str


class ResendPhoneOtpUseCase(BaseUseCase[ResendPhoneOtpRequest, MessageResponse]):
    """Use case for issuing a fresh phone one-time code.

    The new code overwrites the stored one; an earlier code stops working
    immediately.
    """

    def __init__(
        self,
        identity_service: IdentityService,
        code_generator: CodeGenerator,
        notification_service: NotificationService,
    ) -> None:
        """Initialize resend phone OTP use case.

        Args:
            identity_service: Identity domain service
            code_generator: Verification artifact generator
            notification_service: Notification domain service
        """
        self.identity_service = identity_service
        self.code_generator = code_generator
        self.notification_service = notification_service

    async def execute(self, request: ResendPhoneOtpRequest) -> MessageResponse:
        """Regenerate and resend the code.

        Unknown emails and identities without a phone get the same answer
        as a successful resend.
        """
        email = parse_email(request.email)
        identity = await self.identity_service.get_by_email(email) if email else None
        if not identity:
            logfire.info("OTP resend for unknown email")
            return MessageResponse(message=RESEND_OTP_MESSAGE)

        if not identity.phone:
            logfire.info(
                "OTP resend for identity without phone", identity_id=str(identity.id)
            )
            return MessageResponse(message=RESEND_OTP_MESSAGE)

        otp = self.code_generator.phone_otp()
        await self.identity_service.update(identity.id, phone_otp=otp)
        await self.identity_service.commit()
        await self.notification_service.send_phone_otp(identity.phone, otp)

        return MessageResponse(message=RESEND_OTP_MESSAGE)
