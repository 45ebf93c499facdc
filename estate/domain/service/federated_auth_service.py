"""Federated sign-in domain service."""

import logfire

from estate.domain.value import FederatedIdentityInfo, FederatedProvider


class AssertionVerifier:
    """Generic verifier interface for third-party identity assertions."""

    async def verify(self, credential: str) -> FederatedIdentityInfo:
        """Verify a signed assertion against the provider's keys and issuer.

        Args:
            credential: Raw assertion (e.g. a Google ID token)

        Returns:
            Identity facts from the verified assertion

        Raises:
            InvalidAssertionError: If the assertion is forged, expired or
                issued for another audience
        """
        raise NotImplementedError


class FederatedAuthService:
    """Domain service dispatching assertion verification per provider."""

    def __init__(self, verifiers: dict[FederatedProvider, AssertionVerifier]) -> None:
        """Initialize federated auth service.

        Args:
            verifiers: Map of provider to assertion verifier
        """
        self.verifiers = verifiers

    async def verify_assertion(
        self, provider: FederatedProvider, credential: str
    ) -> FederatedIdentityInfo:
        """Verify an assertion from any supported provider.

        Args:
            provider: Provider that issued the assertion
            credential: Raw assertion

        Returns:
            Verified identity facts

        Raises:
            ValueError: If provider not supported
            InvalidAssertionError: If verification fails
        """
        verifier = self.verifiers.get(provider)
        if not verifier:
            raise ValueError(f"Unsupported provider: {provider}")

        with logfire.span(
            "federated_auth_service.verify_assertion", provider=provider.value
        ):
            info = await verifier.verify(credential)
            logfire.info(
                "Federated assertion verified",
                provider=provider.value,
                subject=info.subject,
                email=info.email.root,
            )
            return info
