"""Domain services."""

from .code_generator import CodeGenerator
from .federated_auth_service import AssertionVerifier, FederatedAuthService
from .identity_service import IdentityService
from .jwt_service import JWTService
from .notification_service import (
    EmailGateway,
    NotificationGateway,
    NotificationService,
    SmsGateway,
)
from .password_service import PasswordService

__all__ = [
    "AssertionVerifier",
    "CodeGenerator",
    "EmailGateway",
    "FederatedAuthService",
    "IdentityService",
    "JWTService",
    "NotificationGateway",
    "NotificationService",
    "PasswordService",
    "SmsGateway",
]
