"""Domain layer DI providers."""

from dishka import Scope, provide

from estate.config import AuthSettings, Settings
from estate.domain.repository import IdentityRepository
from estate.domain.service import (
    AssertionVerifier,
    CodeGenerator,
    EmailGateway,
    FederatedAuthService,
    IdentityService,
    JWTService,
    NotificationService,
    PasswordService,
    SmsGateway,
)
from estate.domain.value import FederatedProvider
from estate.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Services that touch the repository are REQUEST-scoped to align with the
    session lifecycle. Stateless services live for the whole app.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_password_service(self, auth_settings: AuthSettings) -> PasswordService:
        """Provide password hashing service."""
        return PasswordService(rounds=auth_settings.bcrypt_rounds)

    @provide(scope=Scope.APP)
    def get_code_generator(self, auth_settings: AuthSettings) -> CodeGenerator:
        """Provide verification artifact generator."""
        return CodeGenerator(otp_length=auth_settings.otp_length)

    @provide(scope=Scope.APP)
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide(scope=Scope.APP)
    def get_notification_service(
        self,
        email_gateway: EmailGateway,
        sms_gateway: SmsGateway,
        settings: Settings,
    ) -> NotificationService:
        """Provide notification domain service."""
        return NotificationService(
            email_gateway=email_gateway, sms_gateway=sms_gateway, settings=settings
        )

    @provide(scope=Scope.APP)
    def get_federated_auth_service(
        self, verifiers: dict[FederatedProvider, AssertionVerifier]
    ) -> FederatedAuthService:
        """Provide federated sign-in domain service.

        Args:
            verifiers: Dictionary mapping providers to their assertion verifiers

        Returns:
            FederatedAuthService configured with all available verifiers
        """
        return FederatedAuthService(verifiers=verifiers)

    @provide
    def get_identity_service(
        self, identity_repository: IdentityRepository
    ) -> IdentityService:
        """Provide identity domain service."""
        return IdentityService(identity_repository=identity_repository)
