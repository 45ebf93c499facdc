"""Phone channel gateway over carrier email-to-SMS bridges.

Carriers accept short emails at ``<10 digit number>@<gateway domain>``
and forward the text to the handset. The domain is chosen by the
number's prefix.
"""

import re

import logfire

from estate.adapter.error import NotificationDeliveryError
from estate.config import SmsSettings
from estate.domain.service.notification_service import SmsGateway

from .email_gateway import SentMessage
from .transport import SmtpTransport

_NON_DIGITS = re.compile(r"\D")


def sms_gateway_address(phone: str, settings: SmsSettings) -> str:
    """Map a phone number to its carrier gateway address.

    Args:
        phone: Phone number in any formatting (``+91 98100-12345``)
        settings: Carrier domain table

    Returns:
        Gateway email address

    Raises:
        NotificationDeliveryError: If the number has fewer than 10 digits
    """
    digits = _NON_DIGITS.sub("", phone)
    if len(digits) < 10:
        raise NotificationDeliveryError(f"Phone number too short: {phone}")
    local = digits[-10:]

    # Longest matching prefix wins
    domain = settings.default_domain
    for prefix in sorted(settings.carrier_domains, key=len, reverse=True):
        if local.startswith(prefix):
            domain = settings.carrier_domains[prefix]
            break

    return f"{local}@{domain}"


class EmailToSmsGateway(SmsGateway):
    """Delivers phone notifications as emails to carrier SMS bridges."""

    def __init__(self, transport: SmtpTransport, settings: SmsSettings) -> None:
        """Initialize gateway.

        Args:
            transport: SMTP transport
            settings: Carrier domain table and message length limit
        """
        self.transport = transport
        self.settings = settings

    async def send(self, recipient: str, subject: str, body: str) -> None:
        """Send a text message.

        The body is truncated to the carrier's message length.

        Raises:
            NotificationDeliveryError: If the number is unusable or the relay
                rejects the message
        """
        address = sms_gateway_address(recipient, self.settings)
        text = body[: self.settings.max_length]
        await self.transport.send(address, subject, text)
        logfire.info("SMS submitted", phone=recipient, gateway=address)


class MockSmsGateway(SmsGateway):
    """Mock phone gateway for testing.

    Records messages instead of sending them. Set ``fail`` to make every
    send raise.
    """

    def __init__(self, fail: bool = False):
        self.sent: list[SentMessage] = []
        self.fail = fail

    async def send(self, recipient: str, subject: str, body: str) -> None:
        if self.fail:
            raise NotificationDeliveryError("Mock SMS gateway failure")
        self.sent.append(SentMessage(recipient=recipient, subject=subject, body=body))

    def last_to(self, recipient: str) -> SentMessage | None:
        """Most recent message sent to ``recipient``."""
        for message in reversed(self.sent):
            if message.recipient == recipient:
                return message
        return None
