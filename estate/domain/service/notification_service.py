"""Notification domain service.

Composes verification and reset messages and hands them to the email or
phone gateway. Delivery is best-effort: a gateway failure is logged and
returned as a ``DeliveryWarning``; it never fails the calling operation.
"""

import logfire

from estate.config import Settings
from estate.domain.value import DeliveryWarning, NotificationChannel


class NotificationGateway:
    """Generic gateway interface: send message M to address A.

    Implementations raise on failure; returning means the message was
    accepted by the transport (delivery is not confirmed).
    """

    async def send(self, recipient: str, subject: str, body: str) -> None:
        """Send a message.

        Args:
            recipient: Destination address (email address or phone number)
            subject: Subject line (ignored by channels without one)
            body: Message text
        """
        raise NotImplementedError


class EmailGateway(NotificationGateway):
    """Gateway delivering to email inboxes.

    Provides type distinction for dependency injection.
    """

    pass


class SmsGateway(NotificationGateway):
    """Gateway delivering to phones.

    Provides type distinction for dependency injection.
    """

    pass


class NotificationService:
    """Domain service for identity notifications."""

    def __init__(
        self,
        email_gateway: EmailGateway,
        sms_gateway: SmsGateway,
        settings: Settings,
    ) -> None:
        """Initialize notification service.

        Args:
            email_gateway: Email channel gateway
            sms_gateway: Phone channel gateway
            settings: Application settings (brand name, frontend URL)
        """
        self.email_gateway = email_gateway
        self.sms_gateway = sms_gateway
        self.settings = settings

    def verification_url(self, token: str) -> str:
        """Link the user follows to verify their email."""
        return f"{self.settings.api.frontend_url}/verify-email/{token}"

    def reset_url(self, token: str) -> str:
        """Link the user follows to reset their password."""
        return f"{self.settings.api.frontend_url}/reset-password?token={token}"

    async def send_email_verification(
        self, email: str, token: str
    ) -> DeliveryWarning | None:
        """Send the email verification link.

        Args:
            email: Recipient address
            token: Email verification token

        Returns:
            A warning if the gateway failed, otherwise None
        """
        app_name = self.settings.app_name
        url = self.verification_url(token)
        body = (
            f"Thank you for registering with {app_name}.\n\n"
            f"Please verify your email address by opening this link:\n{url}\n\n"
            f"If you did not create an account with {app_name}, "
            "please ignore this email."
        )
        return await self._dispatch(
            NotificationChannel.EMAIL,
            email,
            f"{app_name} - Email Verification",
            body,
        )

    async def send_phone_otp(self, phone: str, otp: str) -> DeliveryWarning | None:
        """Send the phone one-time code.

        Args:
            phone: Recipient phone number
            otp: One-time code

        Returns:
            A warning if the gateway failed, otherwise None
        """
        body = f"Your {self.settings.app_name} verification code is: {otp}"
        return await self._dispatch(
            NotificationChannel.SMS, phone, self.settings.app_name, body
        )

    async def send_password_reset(
        self, email: str, token: str
    ) -> DeliveryWarning | None:
        """Send the password reset link.

        Args:
            email: Recipient address
            token: Reset token

        Returns:
            A warning if the gateway failed, otherwise None
        """
        app_name = self.settings.app_name
        url = self.reset_url(token)
        minutes = self.settings.auth.reset_token_expiry_minutes
        body = (
            f"You have requested to reset your password for your {app_name} account.\n\n"
            f"Open this link to choose a new password:\n{url}\n\n"
            f"This link will expire in {minutes} minutes. If you did not request "
            "a password reset, please ignore this email."
        )
        return await self._dispatch(
            NotificationChannel.EMAIL,
            email,
            f"{app_name} - Password Reset",
            body,
        )

    async def _dispatch(
        self,
        channel: NotificationChannel,
        recipient: str,
        subject: str,
        body: str,
    ) -> DeliveryWarning | None:
        gateway = (
            self.email_gateway
            if channel == NotificationChannel.EMAIL
            else self.sms_gateway
        )
        with logfire.span(
            "notification_service.dispatch", channel=channel.value, recipient=recipient
        ):
            try:
                await gateway.send(recipient, subject, body)
            except Exception as e:
                logfire.error(
                    "Notification delivery failed",
                    channel=channel.value,
                    recipient=recipient,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                return DeliveryWarning(
                    channel=channel,
                    recipient=recipient,
                    message=f"Could not send {channel.value} notification",
                )
            logfire.info(
                "Notification sent", channel=channel.value, recipient=recipient
            )
            return None
