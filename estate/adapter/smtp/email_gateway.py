"""Email channel gateway."""

from dataclasses import dataclass

import logfire

from estate.adapter.error import NotificationDeliveryError
from estate.domain.service.notification_service import EmailGateway

from .transport import SmtpTransport


class SmtpEmailGateway(EmailGateway):
    """Delivers email notifications through an SMTP relay."""

    def __init__(self, transport: SmtpTransport) -> None:
        """Initialize gateway.

        Args:
            transport: SMTP transport
        """
        self.transport = transport

    async def send(self, recipient: str, subject: str, body: str) -> None:
        """Send an email.

        Raises:
            NotificationDeliveryError: If the relay rejects the message
        """
        await self.transport.send(recipient, subject, body)
        logfire.info("Email submitted", to=recipient, subject=subject)


@dataclass
class SentMessage:
    """A message captured by a mock gateway."""

    recipient: str
    subject: str
    body: str


class MockEmailGateway(EmailGateway):
    """Mock email gateway for testing.

    Records messages instead of sending them. Set ``fail`` to make every
    send raise.
    """

    def __init__(self, fail: bool = False):
        self.sent: list[SentMessage] = []
        self.fail = fail

    async def send(self, recipient: str, subject: str, body: str) -> None:
        if self.fail:
            raise NotificationDeliveryError("Mock email gateway failure")
        self.sent.append(SentMessage(recipient=recipient, subject=subject, body=body))

    def last_to(self, recipient: str) -> SentMessage | None:
        """Most recent message sent to ``recipient``."""
        for message in reversed(self.sent):
            if message.recipient == recipient:
                return message
        return None
