"""Blocking SMTP submission, run off the event loop."""

import asyncio
import smtplib
from email.message import EmailMessage

import logfire

from estate.adapter.error import NotificationDeliveryError
from estate.config import EmailSettings


class SmtpTransport:
    """Submits plain-text messages to the configured SMTP relay.

    A new connection is opened per message; volume here is a handful of
    verification messages per registration.
    """

    def __init__(self, settings: EmailSettings) -> None:
        """Initialize transport.

        Args:
            settings: SMTP relay configuration
        """
        self.settings = settings

    def build_message(self, to_address: str, subject: str, body: str) -> EmailMessage:
        """Compose a plain-text message from the configured sender."""
        msg = EmailMessage()
        msg["Subject"] = subject
        msg["From"] = self.settings.from_address
        msg["To"] = to_address
        msg.set_content(body)
        return msg

    async def send(self, to_address: str, subject: str, body: str) -> None:
        """Send a message.

        Args:
            to_address: Recipient email address
            subject: Subject line
            body: Plain-text body

        Raises:
            NotificationDeliveryError: If the relay rejects the message or
                cannot be reached
        """
        msg = self.build_message(to_address, subject, body)
        await asyncio.to_thread(self._submit, msg)

    def _submit(self, msg: EmailMessage) -> None:
        settings = self.settings
        try:
            with smtplib.SMTP(
                settings.host, settings.port, timeout=settings.timeout
            ) as smtp:
                if settings.use_tls:
                    smtp.starttls()
                if settings.username and settings.password:
                    smtp.login(settings.username, settings.password)
                smtp.send_message(msg)
        except smtplib.SMTPAuthenticationError as e:
            logfire.error(
                "SMTP authentication failed",
                username=settings.username,
                error=str(e),
            )
            raise NotificationDeliveryError(f"SMTP authentication failed: {e}") from e
        except smtplib.SMTPException as e:
            logfire.error("SMTP error", to=msg["To"], error=str(e))
            raise NotificationDeliveryError(f"SMTP error: {e}") from e
        except OSError as e:
            logfire.error(
                "SMTP connection failed",
                host=settings.host,
                port=settings.port,
                error=str(e),
            )
            raise NotificationDeliveryError(f"Network error: {e}") from e
