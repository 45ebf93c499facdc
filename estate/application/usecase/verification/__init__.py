"""Email and phone verification use cases."""

from .resend_email_verification import ResendEmailVerificationUseCase
from .resend_phone_otp import ResendPhoneOtpUseCase
from .verify_email import VerifyEmailUseCase
from .verify_phone import VerifyPhoneUseCase

__all__ = [
    "ResendEmailVerificationUseCase",
    "ResendPhoneOtpUseCase",
    "VerifyEmailUseCase",
    "VerifyPhoneUseCase",
]
