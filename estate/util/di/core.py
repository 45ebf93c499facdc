"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from estate.config import (
    AuthSettings,
    ConfigurationError,
    EmailSettings,
    Settings,
    SmsSettings,
)
from estate.util.di.base import ProviderBase

_DEFAULT_SECRET = "CHANGE_ME_IN_PRODUCTION"


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings.

        Raises:
            ConfigurationError: If production runs with the placeholder secret
        """
        if (
            settings.environment in ("staging", "production")
            and settings.auth.jwt_secret == _DEFAULT_SECRET
        ):
            raise ConfigurationError("AUTH__JWT_SECRET must be set outside development")
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_email_settings(self, settings: Settings) -> EmailSettings:
        """Provide SMTP settings."""
        return settings.email

    @provide(scope=Scope.APP)
    def provide_sms_settings(self, settings: Settings) -> SmsSettings:
        """Provide email-to-SMS gateway settings."""
        return settings.sms
