"""Password reset use cases."""

from .forgot_password import ForgotPasswordUseCase
from .reset_password import ResetPasswordUseCase

__all__ = ["ForgotPasswordUseCase", "ResetPasswordUseCase"]
