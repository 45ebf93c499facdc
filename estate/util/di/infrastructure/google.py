"""Google Sign-In infrastructure providers."""

from dishka import Scope, provide

from estate.adapter.google import GoogleIdentityVerifier, RealGoogleIdentityVerifier
from estate.config import AuthSettings
from estate.util.di.base import ProviderBase


class GoogleProvider(ProviderBase):
    """Google component base."""

    __mock_component__ = "google"


class ProdGoogleProvider(GoogleProvider):
    """Production Google provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_google_verifier(self, auth_settings: AuthSettings) -> GoogleIdentityVerifier:
        """Provide Google ID token verifier.

        Returns:
            Verifier bound to our OAuth client ID

        Raises:
            ValueError: If the Google client ID is not configured
        """
        if not auth_settings.google.client_id:
            raise ValueError("Google OAuth client ID must be configured")

        return RealGoogleIdentityVerifier(
            client_id=auth_settings.google.client_id,
            certs_url=auth_settings.google.certs_url,
        )
