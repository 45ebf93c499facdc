"""SMTP notification gateways."""

from .email_gateway import MockEmailGateway, SmtpEmailGateway
from .sms_gateway import EmailToSmsGateway, MockSmsGateway, sms_gateway_address
from .transport import SmtpTransport

__all__ = [
    "EmailToSmsGateway",
    "MockEmailGateway",
    "MockSmsGateway",
    "SmtpEmailGateway",
    "SmtpTransport",
    "sms_gateway_address",
]
