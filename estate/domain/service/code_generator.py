"""Verification token and one-time code generation."""

import secrets


class CodeGenerator:
    """Produces unguessable verification artifacts. Stateless."""

    def __init__(self, otp_length: int = 6) -> None:
        """Initialize code generator.

        Args:
            otp_length: Number of digits in phone one-time codes
        """
        if otp_length < 4:
            raise ValueError("OTP length must be at least 4 digits")
        self.otp_length = otp_length

    def email_verification_token(self) -> str:
        """Return a 64-character hex token for email links."""
        return secrets.token_hex(32)

    def reset_token(self) -> str:
        """Return a 64-character hex token for password reset links."""
        return secrets.token_hex(32)

    def phone_otp(self) -> str:
        """Return a numeric code with no leading zero (e.g. 6 digits: 100000-999999)."""
        low = 10 ** (self.otp_length - 1)
        return str(low + secrets.randbelow(9 * low))
