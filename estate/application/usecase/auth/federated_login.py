"""Federated sign-in use case."""

from uuid import uuid4

import logfire
from pydantic import BaseModel

from estate.application.usecase.base import BaseUseCase
from estate.application.usecase.common import IdentityProfile, SessionResponse
from estate.config import AuthSettings
from estate.domain.error import AccountLinkingError, DuplicateIdentityError
from estate.domain.model import Identity
from estate.domain.service import FederatedAuthService, IdentityService, JWTService
from estate.domain.value import FederatedIdentityInfo, FederatedProvider, IdentityId


class FederatedLoginRequest(BaseModel):
    """Signed assertion from a federated provider."""

    credential: str
    provider: FederatedProvider = FederatedProvider.GOOGLE


class FederatedLoginResponse(SessionResponse):
    """Session plus whether this sign-in created the identity."""

    is_new_identity: bool


class FederatedLoginUseCase(BaseUseCase[FederatedLoginRequest, FederatedLoginResponse]):
    """Use case for sign-in with a third-party identity assertion."""

    def __init__(
        self,
        federated_auth_service: FederatedAuthService,
        identity_service: IdentityService,
        jwt_service: JWTService,
        auth_settings: AuthSettings,
    ) -> None:
        """Initialize federated login use case.

        Args:
            federated_auth_service: Assertion verification service
            identity_service: Identity domain service
            jwt_service: JWT token domain service
            auth_settings: Authentication settings (account linking policy)
        """
        self.federated_auth_service = federated_auth_service
        self.identity_service = identity_service
        self.jwt_service = jwt_service
        self.auth_settings = auth_settings

    async def execute(self, request: FederatedLoginRequest) -> FederatedLoginResponse:
        """Execute federated sign-in.

        Steps:
        1. Verify the assertion (nothing is written if this fails)
        2. No identity for the email: create one, email pre-verified
        3. Identity without a federated id: link it, if policy allows
        4. Record the login and issue a session

        Raises:
            InvalidAssertionError: If the assertion is forged or expired
            AccountLinkingError: If linking to an existing account is refused
        """
        info = await self.federated_auth_service.verify_assertion(
            request.provider, request.credential
        )

        with logfire.span(
            "federated_login", provider=info.provider.value, email=info.email.root
        ):
            identity = await self.identity_service.get_by_email(info.email)
            is_new = identity is None

            if identity is None:
                try:
                    identity = await self.identity_service.create(
                        self._new_identity(info)
                    )
                except DuplicateIdentityError:
                    # A concurrent first sign-in created it
                    logfire.info("Federated identity created concurrently")
                    identity = await self.identity_service.get_by_email(info.email)
                    is_new = False
                    if identity is None:
                        raise

            if identity.federated_id is None:
                identity = await self._link(identity, info)

            identity = await self.identity_service.record_login(identity.id)
            await self.identity_service.commit()
            token = self.jwt_service.create_token(identity)

            logfire.info(
                "Federated sign-in succeeded",
                identity_id=str(identity.id),
                is_new_identity=is_new,
            )

            return FederatedLoginResponse(
                message="Sign-in successful",
                token=token,
                user=IdentityProfile.from_identity(identity),
                email_verified=identity.email_verified,
                phone_verified=identity.phone_verified,
                is_new_identity=is_new,
            )

    def _new_identity(self, info: FederatedIdentityInfo) -> Identity:
        return Identity(
            id=IdentityId(uuid4()),
            name=info.name or info.email.root.split("@")[0],
            email=info.email,
            profile_picture=info.picture or "",
            email_verified=True,  # Provider vouches for the inbox
            federated_id=info.subject,
        )

    async def _link(self, identity: Identity, info: FederatedIdentityInfo) -> Identity:
        if not self.auth_settings.link_federated_by_email:
            logfire.warn(
                "Federated link refused by policy", identity_id=str(identity.id)
            )
            raise AccountLinkingError(
                "An account with this email already exists. "
                "Sign in with your password."
            )
        if not info.email_verified:
            logfire.warn(
                "Federated link refused - provider email unverified",
                identity_id=str(identity.id),
            )
            raise AccountLinkingError(
                "The provider has not verified this email address"
            )

        fields: dict = {"federated_id": info.subject, "email_verified": True}
        if not identity.profile_picture and info.picture:
            fields["profile_picture"] = info.picture

        logfire.info(
            "Linking federated subject to existing identity",
            identity_id=str(identity.id),
            provider=info.provider.value,
        )
        return await self.identity_service.update(identity.id, **fields)
