"""Get current identity use case."""

from uuid import UUID

from pydantic import BaseModel

from estate.application.usecase.base import BaseUseCase
from estate.application.usecase.common import IdentityProfile
from estate.domain.service import IdentityService, JWTService
from estate.domain.value import IdentityId
from estate.util.jwt import InvalidTokenError


class GetCurrentIdentityRequest(BaseModel):
    """Get current identity request."""

    token: str  # JWT token


class AuthenticatedIdentity(BaseModel):
    """Result of validating a bearer session.

    Passed explicitly to whatever needs to know who is calling.
    """

    identity_id: str
    email: str
    is_seller: bool
    profile: IdentityProfile


class GetCurrentIdentityUseCase(
    BaseUseCase[GetCurrentIdentityRequest, AuthenticatedIdentity]
):
    """Use case for resolving a bearer session to its identity."""

    def __init__(
        self,
        jwt_service: JWTService,
        identity_service: IdentityService,
    ) -> None:
        """Initialize get current identity use case.

        Args:
            jwt_service: JWT token domain service
            identity_service: Identity domain service
        """
        self.jwt_service = jwt_service
        self.identity_service = identity_service

    async def execute(self, request: GetCurrentIdentityRequest) -> AuthenticatedIdentity:
        """Validate the session and load the backing identity.

        Raises:
            InvalidTokenError: If the signature or claims are invalid
            TokenExpiredError: If the token has expired
            NotFoundError: If the identity was deleted after issuance
        """
        payload = self.jwt_service.verify_token(request.token)

        try:
            identity_id = IdentityId(UUID(payload.id))
        except ValueError:
            raise InvalidTokenError("Invalid token")

        identity = await self.identity_service.get_by_id(identity_id)

        # Role comes from the record, not the claim
        return AuthenticatedIdentity(
            identity_id=str(identity.id),
            email=identity.email.root,
            is_seller=identity.is_seller,
            profile=IdentityProfile.from_identity(identity),
        )
