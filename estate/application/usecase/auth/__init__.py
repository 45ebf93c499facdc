"""Authentication use cases."""

from .federated_login import FederatedLoginUseCase
from .get_current_identity import GetCurrentIdentityUseCase
from .login import LoginUseCase
from .register import RegisterUseCase

__all__ = [
    "FederatedLoginUseCase",
    "GetCurrentIdentityUseCase",
    "LoginUseCase",
    "RegisterUseCase",
]
