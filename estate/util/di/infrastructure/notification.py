"""Notification infrastructure providers."""

from dishka import Scope, provide

from estate.adapter.smtp import EmailToSmsGateway, SmtpEmailGateway, SmtpTransport
from estate.config import EmailSettings, SmsSettings
from estate.domain.service import EmailGateway, SmsGateway
from estate.util.di.base import ProviderBase


class NotificationProvider(ProviderBase):
    """Notification component base."""

    __mock_component__ = "notification"


class ProdNotificationProvider(NotificationProvider):
    """Production notification provider over SMTP."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_smtp_transport(self, email_settings: EmailSettings) -> SmtpTransport:
        """Provide SMTP transport shared by both channels."""
        return SmtpTransport(email_settings)

    @provide(scope=Scope.APP)
    def get_email_gateway(self, transport: SmtpTransport) -> EmailGateway:
        """Provide email channel gateway."""
        return SmtpEmailGateway(transport)

    @provide(scope=Scope.APP)
    def get_sms_gateway(
        self, transport: SmtpTransport, sms_settings: SmsSettings
    ) -> SmsGateway:
        """Provide phone channel gateway over carrier email-to-SMS bridges."""
        return EmailToSmsGateway(transport, sms_settings)
