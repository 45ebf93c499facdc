"""Application layer DI providers."""

from dishka import Scope, provide

from estate.application.usecase.auth import (
    FederatedLoginUseCase,
    GetCurrentIdentityUseCase,
    LoginUseCase,
    RegisterUseCase,
)
from estate.application.usecase.password import (
    ForgotPasswordUseCase,
    ResetPasswordUseCase,
)
from estate.application.usecase.profile import UpdateProfileUseCase
from estate.application.usecase.verification import (
    ResendEmailVerificationUseCase,
    ResendPhoneOtpUseCase,
    VerifyEmailUseCase,
    VerifyPhoneUseCase,
)
from estate.config import AuthSettings
from estate.domain.service import (
    CodeGenerator,
    FederatedAuthService,
    IdentityService,
    JWTService,
    NotificationService,
    PasswordService,
)
from estate.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Auth use cases
    @provide(scope=Scope.REQUEST)
    def get_register_use_case(
        self,
        identity_service: IdentityService,
        password_service: PasswordService,
        code_generator: CodeGenerator,
        notification_service: NotificationService,
    ) -> RegisterUseCase:
        """Provide register use case."""
        return RegisterUseCase(
            identity_service=identity_service,
            password_service=password_service,
            code_generator=code_generator,
            notification_service=notification_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_login_use_case(
        self,
        identity_service: IdentityService,
        password_service: PasswordService,
        jwt_service: JWTService,
    ) -> LoginUseCase:
        """Provide login use case."""
        return LoginUseCase(
            identity_service=identity_service,
            password_service=password_service,
            jwt_service=jwt_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_federated_login_use_case(
        self,
        federated_auth_service: FederatedAuthService,
        identity_service: IdentityService,
        jwt_service: JWTService,
        auth_settings: AuthSettings,
    ) -> FederatedLoginUseCase:
        """Provide federated login use case."""
        return FederatedLoginUseCase(
            federated_auth_service=federated_auth_service,
            identity_service=identity_service,
            jwt_service=jwt_service,
            auth_settings=auth_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_current_identity_use_case(
        self, jwt_service: JWTService, identity_service: IdentityService
    ) -> GetCurrentIdentityUseCase:
        """Provide get current identity use case."""
        return GetCurrentIdentityUseCase(
            jwt_service=jwt_service, identity_service=identity_service
        )

    # Verification use cases
    @provide(scope=Scope.REQUEST)
    def get_verify_email_use_case(
        self, identity_service: IdentityService, jwt_service: JWTService
    ) -> VerifyEmailUseCase:
        """Provide verify email use case."""
        return VerifyEmailUseCase(
            identity_service=identity_service, jwt_service=jwt_service
        )

    @provide(scope=Scope.REQUEST)
    def get_verify_phone_use_case(
        self, identity_service: IdentityService, jwt_service: JWTService
    ) -> VerifyPhoneUseCase:
        """Provide verify phone use case."""
        return VerifyPhoneUseCase(
            identity_service=identity_service, jwt_service=jwt_service
        )

    @provide(scope=Scope.REQUEST)
    def get_resend_email_verification_use_case(
        self,
        identity_service: IdentityService,
        code_generator: CodeGenerator,
        notification_service: NotificationService,
    ) -> ResendEmailVerificationUseCase:
        """Provide resend email verification use case."""
        return ResendEmailVerificationUseCase(
            identity_service=identity_service,
            code_generator=code_generator,
            notification_service=notification_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_resend_phone_otp_use_case(
        self,
        identity_service: IdentityService,
        code_generator: CodeGenerator,
        notification_service: NotificationService,
    ) -> ResendPhoneOtpUseCase:
        """Provide resend phone OTP use case."""
        return ResendPhoneOtpUseCase(
            identity_service=identity_service,
            code_generator=code_generator,
            notification_service=notification_service,
        )

    # Password use cases
    @provide(scope=Scope.REQUEST)
    def get_forgot_password_use_case(
        self,
        identity_service: IdentityService,
        code_generator: CodeGenerator,
        notification_service: NotificationService,
        auth_settings: AuthSettings,
    ) -> ForgotPasswordUseCase:
        """Provide forgot password use case."""
        return ForgotPasswordUseCase(
            identity_service=identity_service,
            code_generator=code_generator,
            notification_service=notification_service,
            auth_settings=auth_settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_reset_password_use_case(
        self, identity_service: IdentityService, password_service: PasswordService
    ) -> ResetPasswordUseCase:
        """Provide reset password use case."""
        return ResetPasswordUseCase(
            identity_service=identity_service, password_service=password_service
        )

    # Profile use cases
    @provide(scope=Scope.REQUEST)
    def get_update_profile_use_case(
        self, identity_service: IdentityService
    ) -> UpdateProfileUseCase:
        """Provide update profile use case."""
        return UpdateProfileUseCase(identity_service=identity_service)
