"""Unit tests for CodeGenerator."""

import pytest

from estate.domain.service import CodeGenerator


class TestCodeGenerator:
    """Tests for verification artifact generation."""

    def test_phone_otp_is_six_digits_without_leading_zero(self):
        """Codes should fall in 100000-999999."""
        generator = CodeGenerator()

        for _ in range(200):
            otp = generator.phone_otp()
            assert len(otp) == 6
            assert otp.isdigit()
            assert 100000 <= int(otp) <= 999999

    def test_phone_otp_honours_length(self):
        """A configured length should change the digit count."""
        assert len(CodeGenerator(otp_length=8).phone_otp()) == 8

    def test_rejects_short_otp_length(self):
        """Very short codes should not be configurable."""
        with pytest.raises(ValueError):
            CodeGenerator(otp_length=3)

    def test_tokens_are_64_hex_chars_and_distinct(self):
        """Email and reset tokens should be 32 random bytes in hex."""
        generator = CodeGenerator()

        tokens = {generator.email_verification_token() for _ in range(50)}
        tokens |= {generator.reset_token() for _ in range(50)}

        assert len(tokens) == 100
        for token in tokens:
            assert len(token) == 64
            int(token, 16)
