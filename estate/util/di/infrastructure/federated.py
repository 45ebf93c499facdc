"""Federated sign-in provider aggregating all assertion verifiers."""

from dishka import Scope, provide

from estate.adapter.google import GoogleIdentityVerifier
from estate.domain.service import AssertionVerifier
from estate.domain.value import FederatedProvider
from estate.util.di.base import ProviderBase


class FederatedAggregatorProvider(ProviderBase):
    """Provider that aggregates all assertion verifiers into a dictionary."""

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_assertion_verifiers(
        self, google_verifier: GoogleIdentityVerifier
    ) -> dict[FederatedProvider, AssertionVerifier]:
        """Provide dictionary of all assertion verifiers by provider.

        Args:
            google_verifier: Google ID token verifier (specific type)

        Returns:
            Dictionary mapping FederatedProvider to AssertionVerifier
        """
        return {FederatedProvider.GOOGLE: google_verifier}
